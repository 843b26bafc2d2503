"""
영업 담당자 연락처 디렉토리입니다.
실제 담당자 정보로 수정해서 사용하세요. id는 kebab-case로 고유해야 합니다.
"""

from app.models import ContactRecord

CONTACTS: list[ContactRecord] = [
    ContactRecord(
        id="mark-sheppard",
        contact_name="Mark Sheppard",
        email="mark@pacificbathroom.com.au",
        phone="07 4755 2266",
        title="Sales Manager",
        company="Pacific Bathroom",
        initials="MS",
    ),
    ContactRecord(
        id="amy-keys",
        contact_name="Amy Keys",
        email="amy@pacificbathroom.com.au",
        phone="07 4755 2266",
        title="Showroom Consultant",
        company="Pacific Bathroom",
        initials="AK",
    ),
    ContactRecord(
        id="jeff-copper",
        contact_name="Jeff Copper",
        email="jeff@pacificbathroom.com.au",
        phone="0499 247 061",
        title="Director",
        company="Pacific Bathroom",
        initials="JC",
    ),
    ContactRecord(
        id="wayne-kennedy",
        contact_name="Wayne Kennedy",
        email="wayne@pacificbathroom.com.au",
        phone="0431 042 233",
        title="Sales Consultant",
        company="Pacific Bathroom",
        initials="WK",
    ),
]
