"""
Static data served in demo mode (no Supabase credentials configured).

Every accessor returns a fresh deep copy so callers may mutate the rows freely.
"""

from copy import deepcopy
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

PHOTOS = {
    "exterior": "https://images.unsplash.com/photo-1587654780291-39c9404d7dd0?w=800",
    "playing": "https://images.unsplash.com/photo-1567057419565-4349c49d8a04?w=800",
    "learning": "https://images.unsplash.com/photo-1503454537195-1dcabb73ffb9?w=800",
    "classroom": "https://images.unsplash.com/photo-1544776193-352d25ca82cd?w=800",
    "playground": "https://images.unsplash.com/photo-1526634332515-d56c5fd16991?w=800",
    "educator": "https://images.unsplash.com/photo-1602052793312-b99c2a9ee797?w=800",
    "reading": "https://images.unsplash.com/photo-1596464716127-f2a82984de30?w=800",
}

DEMO_USER_ID = "00000000-0000-4000-a000-00000000ffff"
# family-role owner of the demo family profile and the member enquiry
DEMO_FAMILY_USER_ID = "00000000-0000-4000-a000-00000000fffe"

WEEKDAY_HOURS = {
    day: {"open": "7:00", "close": "18:00"}
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday")
}


def demo_uuid(index: int) -> str:
    """Deterministic UUID for demo rows."""
    return f"00000000-0000-4000-a000-00000000{index:04x}"


def _days_ago(n: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=n)).isoformat()


def _photos(center_index: int, *keys: str) -> List[Dict[str, Any]]:
    return [
        {
            "id": demo_uuid(center_index * 100 + order),
            "center_id": demo_uuid(center_index),
            "photo_url": PHOTOS[key],
            "display_order": order,
        }
        for order, key in enumerate(keys, start=1)
    ]


def _center(index: int, **fields) -> Dict[str, Any]:
    row = {
        "id": demo_uuid(index),
        "user_id": None,
        "state": "NSW",
        "address": None,
        "phone": None,
        "email": None,
        "website": None,
        "description_zh": None,
        "is_ccs_approved": True,
        "is_founding_partner": False,
        "subscription_status": "active",
        "subscription_trial_end": None,
        "founding_partner_expires_at": None,
        "acecqa_url": "https://www.acecqa.gov.au/",
        "operating_hours": WEEKDAY_HOURS,
        "created_at": _days_ago(90 - index),
        "updated_at": None,
    }
    row.update(fields)
    return row


_CENTERS: List[Dict[str, Any]] = [
    _center(
        1,
        user_id=DEMO_USER_ID,
        center_name="Little Stars Bilingual Early Learning",
        slug="little-stars-chatswood",
        suburb="Chatswood",
        postcode="2067",
        address="12 Railway Street",
        phone="(02) 9411 2345",
        email="hello@littlestars.com.au",
        website="https://www.littlestars.com.au",
        description_en=(
            "A Mandarin-English immersion centre in the heart of Chatswood with "
            "play-based learning, STEM exploration and a nature program."
        ),
        description_zh="小星星双语早教中心位于Chatswood核心地段，是一家优质的中英双语沉浸式教育机构。",
        fee_min=120,
        fee_max=145,
        nqs_rating="exceeding",
        programs=["Bilingual Immersion", "STEM Play", "Outdoor Nature"],
        staff_languages=[
            {"language": "Mandarin", "count": 8},
            {"language": "English", "count": 12},
        ],
        age_groups=[
            {"group_name": "Nursery (0-2)", "capacity": 12, "vacancies": 2},
            {"group_name": "Toddler (2-3)", "capacity": 16, "vacancies": 3},
            {"group_name": "Preschool (3-5)", "capacity": 22, "vacancies": 1},
        ],
        is_founding_partner=True,
        founding_partner_expires_at="2027-06-30T00:00:00+00:00",
        center_photos=_photos(1, "exterior", "classroom", "playing"),
    ),
    _center(
        2,
        center_name="Harmony Kids Childcare",
        slug="harmony-kids-hurstville",
        suburb="Hurstville",
        postcode="2220",
        description_en=(
            "Trilingual care in Mandarin, Cantonese and English with a focus on "
            "early literacy and Chinese cultural traditions."
        ),
        fee_min=110,
        fee_max=135,
        nqs_rating="meeting",
        programs=["Chinese Cultural Program", "Music & Movement", "Early Literacy"],
        staff_languages=[
            {"language": "Mandarin", "count": 6},
            {"language": "English", "count": 10},
            {"language": "Cantonese", "count": 4},
        ],
        age_groups=[
            {"group_name": "Nursery (0-2)", "capacity": 10, "vacancies": 1},
            {"group_name": "Toddler (2-3)", "capacity": 14, "vacancies": 0},
            {"group_name": "Preschool (3-5)", "capacity": 20, "vacancies": 4},
        ],
        is_founding_partner=True,
        center_photos=_photos(2, "playground", "educator"),
    ),
    _center(
        3,
        center_name="Bright Horizons Eastwood",
        slug="bright-horizons-eastwood",
        suburb="Eastwood",
        postcode="2122",
        description_en="A multilingual centre with nature play, cultural arts and STEM discovery.",
        fee_min=130,
        fee_max=155,
        nqs_rating="exceeding",
        programs=["Multilingual Program", "Nature Play", "Cultural Arts", "STEM Discovery"],
        staff_languages=[
            {"language": "Mandarin", "count": 7},
            {"language": "English", "count": 11},
            {"language": "Korean", "count": 4},
        ],
        age_groups=[
            {"group_name": "Toddler (2-3)", "capacity": 15, "vacancies": 2},
            {"group_name": "Preschool (3-5)", "capacity": 20, "vacancies": 3},
        ],
        center_photos=_photos(3, "learning", "reading"),
    ),
    _center(
        4,
        center_name="Sunflower Bilingual Centre",
        slug="sunflower-bilingual-epping",
        suburb="Epping",
        postcode="2121",
        description_en="A small bilingual centre with a strong school readiness program.",
        fee_min=115,
        fee_max=140,
        nqs_rating="meeting",
        programs=["School Readiness", "Bilingual Storytime"],
        staff_languages=[
            {"language": "Mandarin", "count": 4},
            {"language": "English", "count": 8},
        ],
        age_groups=[
            {"group_name": "Preschool (3-5)", "capacity": 20, "vacancies": 5},
        ],
        is_ccs_approved=False,
        center_photos=_photos(4, "classroom"),
    ),
    _center(
        5,
        center_name="Melbourne Mandarin Kids",
        slug="melbourne-mandarin-boxhill",
        suburb="Box Hill",
        postcode="3128",
        state="VIC",
        description_en="Mandarin immersion for toddlers and preschoolers in Box Hill.",
        fee_min=105,
        fee_max=130,
        nqs_rating="meeting",
        programs=["Mandarin Immersion", "Arts & Craft"],
        staff_languages=[
            {"language": "Mandarin", "count": 6},
            {"language": "English", "count": 9},
        ],
        age_groups=[
            {"group_name": "Toddler (2-3)", "capacity": 14, "vacancies": 2},
            {"group_name": "Preschool (3-5)", "capacity": 22, "vacancies": 4},
        ],
        center_photos=_photos(5, "educator", "exterior"),
    ),
]


def _center_summary(center: Dict[str, Any]) -> Dict[str, Any]:
    return {"center_name": center["center_name"], "slug": center["slug"], "suburb": center["suburb"]}


def _enquiry(index: int, center: Dict[str, Any], days_ago: int, **fields) -> Dict[str, Any]:
    row = {
        "id": demo_uuid(1000 + index),
        "center_id": center["id"],
        "family_profile_id": None,
        "guest_name": None,
        "guest_email": None,
        "guest_phone": None,
        "guest_wechat_id": None,
        "guest_child_age": None,
        "guest_child_days_needed": None,
        "guest_suburb": None,
        "guest_message": None,
        "guest_message_translated": None,
        "is_guest": True,
        "status": "new",
        "match_factors": [],
        "center_notes": None,
        "created_at": _days_ago(days_ago),
        "updated_at": None,
        "center_profiles": _center_summary(center),
    }
    row.update(fields)
    return row


_ENQUIRIES: List[Dict[str, Any]] = [
    _enquiry(
        1, _CENTERS[0], 0,
        guest_name="Lisa Chen",
        guest_email="lisa.chen@gmail.com",
        guest_phone="0412 345 678",
        guest_wechat_id="lisachen88",
        guest_child_age="2 years",
        guest_child_days_needed="3 days",
        guest_suburb="Chatswood",
        guest_message=(
            "Hi, I'm interested in enrolling my daughter in your bilingual program. "
            "Could you let me know about availability?"
        ),
    ),
    _enquiry(
        2, _CENTERS[0], 2,
        guest_name="Wang Wei",
        guest_email="wangwei@163.com",
        guest_child_age="3 years",
        guest_child_days_needed="5 days",
        guest_suburb="Willoughby",
        guest_message="你好！我们刚从中国搬到悉尼，想给3岁的儿子找一个双语幼儿园。请问有空位吗？",
        guest_message_translated=(
            "Hello! We have just moved to Sydney from China and are looking for a "
            "bilingual childcare centre for our 3-year-old son. Do you have availability?"
        ),
        status="contacted",
        center_notes="Called back, tour scheduled for next Tuesday",
    ),
    _enquiry(
        3, _CENTERS[1], 1,
        guest_name="Michael Zhang",
        guest_email="m.zhang@yahoo.com",
        guest_child_age="4 years",
        guest_child_days_needed="4 days",
        guest_suburb="Hurstville",
        guest_message="We are looking for somewhere with a stronger Chinese language program.",
    ),
    _enquiry(
        4, _CENTERS[0], 14,
        guest_name="Jenny Liu",
        guest_email="jenny.liu@gmail.com",
        guest_child_age="2.5 years",
        guest_child_days_needed="3 days",
        guest_suburb="Artarmon",
        guest_message="Would love to know more about the toddler room and current fees.",
        status="enrolled",
        center_notes="Enrolled starting March 3. Toddler room, 3 days/week.",
    ),
]

_ENQUIRIES.append(
    _enquiry(
        5, _CENTERS[2], 6,
        family_profile_id=DEMO_FAMILY_USER_ID,
        is_guest=False,
        guest_child_age="3 years",
        guest_child_days_needed="Mon, Wed, Fri",
        guest_message="Hi, we would like to book a tour for our daughter Emma.",
        status="tour_booked",
        match_factors=["language_match", "ccs_approved"],
    )
)

_EDUCATOR_LEADS: List[Dict[str, Any]] = [
    {
        "id": demo_uuid(2001),
        "full_name": "Mei Lin Wang",
        "email": "meilin.wang@gmail.com",
        "suburb": "Chatswood",
        "languages": ["mandarin", "english"],
        "qualification": "diploma",
        "wwcc_number": None,
        "created_at": _days_ago(3),
    },
    {
        "id": demo_uuid(2002),
        "full_name": "Amy Nguyen",
        "email": "amy.nguyen@outlook.com",
        "suburb": "Hurstville",
        "languages": ["cantonese", "english", "mandarin"],
        "qualification": "bachelor",
        "wwcc_number": None,
        "created_at": _days_ago(7),
    },
]

_FAMILY_PROFILE: Dict[str, Any] = {
    "id": demo_uuid(3001),
    "user_id": DEMO_FAMILY_USER_ID,
    "family_name": "Lisa Chen",
    "suburb": "Chatswood",
    "postcode": "2067",
    "state": "NSW",
    "mobile_phone": "0412 345 678",
    "wechat_id": "lisachen88",
    "preferred_contact": "wechat",
    "priorities": ["bilingual_education", "cultural_understanding", "proximity"],
    "created_at": _days_ago(30),
    "updated_at": None,
}

_CHILDREN: List[Dict[str, Any]] = [
    {
        "id": demo_uuid(3101),
        "family_id": _FAMILY_PROFILE["id"],
        "child_name": "Emma",
        "date_of_birth": "2023-06-15",
        "days_needed": ["monday", "wednesday", "friday"],
        "notes": None,
    },
]

_WAITLIST: List[Dict[str, Any]] = [
    {"id": demo_uuid(4001), "email": "waiting@example.com", "suburb": "Parramatta", "created_at": _days_ago(4)},
]


def centers() -> List[Dict[str, Any]]:
    return deepcopy(_CENTERS)


def enquiries() -> List[Dict[str, Any]]:
    return deepcopy(_ENQUIRIES)


def educator_leads() -> List[Dict[str, Any]]:
    return deepcopy(_EDUCATOR_LEADS)


def family_profile() -> Dict[str, Any]:
    return deepcopy(_FAMILY_PROFILE)


def family_profiles() -> List[Dict[str, Any]]:
    return [family_profile()]


def children() -> List[Dict[str, Any]]:
    return deepcopy(_CHILDREN)


def waitlist() -> List[Dict[str, Any]]:
    return deepcopy(_WAITLIST)


def demo_user_id(role: str) -> str:
    """Family identities own the demo family rows; every other role shares one id."""
    return DEMO_FAMILY_USER_ID if role == "family" else DEMO_USER_ID


def demo_account(email: str, role: str = None) -> Dict[str, Any]:
    """Profile row for a demo sign-in; any credentials are accepted.

    Without an explicit role it is inferred from the address the same way the
    web client does: "admin" or "center" in the e-mail, otherwise family.
    """
    if role is None:
        role = "admin" if "admin" in email else "center" if "center" in email else "family"
    return {
        "id": demo_user_id(role),
        "email": email,
        "role": role,
        "preferred_language": "en",
        "is_active": True,
        "onboarding_completed": True,
        "created_at": _days_ago(30),
        "updated_at": None,
    }
