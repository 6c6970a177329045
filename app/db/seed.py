"""
seed.py

시드(demo) 데이터 적재 파일.

앱 시작 시(lifespan) 한 번 호출되어
고정된 사용자 / 카테고리 / 동아리 / 회원 / 행사 / 공지 / 가입 요청을 적재한다.
저장소가 메모리 DB 이므로 프로세스가 재시작될 때마다 이 상태로 돌아간다.

시드 데이터 규칙:
- 시드 사용자는 비밀번호가 없고 이메일만으로 로그인
- 시드 동아리는 삭제 요청에 성공 응답만 주고 실제로는 삭제되지 않음
- 시각은 적재 시점 기준 상대값 (예: 행사는 +1일, 공지는 -24시간)

관련 파일:
- app.main               : lifespan 에서 seed_demo_data 호출
- tests.conftest         : 테스트마다 새 DB 에 적재

"""

from datetime import timedelta

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.base import utcnow
from app.models.announcement import Announcement
from app.models.club import Category, Club, ClubMember, MembershipRequest, RequestStatus
from app.models.event import Event, EventAttendee, EventStatus
from app.models.user import Role, User


USERS = [
    ("user1", "John", "Doe", "john@college.edu", Role.SUPER_ADMIN),
    ("user2", "Jane", "Smith", "jane@college.edu", Role.CLUB_HEAD),
    ("user3", "Alice", "Johnson", "alice@college.edu", Role.STUDENT),
]

CATEGORIES = [
    ("cat1", "Technology", "#2196F3"),
    ("cat2", "Arts", "#FF9800"),
    ("cat3", "Sports", "#4CAF50"),
    ("cat4", "Academic", "#9C27B0"),
    ("cat5", "Social", "#FF5722"),
]

# (id, name, description, category, admins, requireApproval, members)
CLUBS = [
    ("club1", "Programming Club", "Learn programming together", "cat1", ["user1"], False, ["user1", "user2", "user3"]),
    ("club2", "Photography Club", "Capture beautiful moments", "cat2", ["user2"], True, ["user2", "user3"]),
    ("club3", "Music Club", "Make music together", "cat2", ["user1"], True, ["user1", "user3"]),
    ("club4", "Debate Club", "Sharpen your argumentation skills", "cat4", ["user2"], False, ["user2", "user3"]),
]

# (id, title, description, club, organizer, start offset(days), duration(hours), location, max, status, attendees)
EVENTS = [
    (
        "event1", "JavaScript Workshop", "Learn modern JavaScript concepts and best practices.",
        "club1", "user1", 1, 3, "Computer Lab A", 30, EventStatus.UPCOMING, ["user2"],
    ),
    (
        "event2", "Photography Walk", "Explore campus beauty through your lens.",
        "club2", "user2", 3, 2, "Campus Gardens", 20, EventStatus.UPCOMING, ["user1", "user3"],
    ),
    (
        "event3", "Music Jam Session", "Bring your instruments and let's make music together!",
        "club3", "user1", 5, 4, "Music Room 101", 15, EventStatus.UPCOMING, ["user2"],
    ),
    (
        "event4", "Debate Tournament", "Test your argumentation skills in our monthly debate tournament.",
        "club4", "user2", 7, 6, "Auditorium", 25, EventStatus.UPCOMING, ["user1", "user3"],
    ),
    (
        "event5", "Past Coding Bootcamp", "A completed intensive coding bootcamp.",
        "club1", "user1", -7, 8, "Computer Lab B", 20, EventStatus.COMPLETED, ["user2", "user3"],
    ),
]

# (id, title, content, club, author, age(hours))
ANNOUNCEMENTS = [
    (
        "ann1", "Welcome to Programming Club!",
        "We are excited to have you join our programming community. "
        "Get ready for amazing workshops and coding challenges!",
        "club1", "user1", 24,
    ),
    (
        "ann2", "Photography Exhibition This Weekend",
        "Don't miss our annual photography exhibition featuring amazing works from our club members.",
        "club2", "user2", 12,
    ),
    (
        "ann3", "Music Club Equipment Update",
        "We've received new musical instruments! Come check them out at our next meeting.",
        "club3", "user1", 6,
    ),
    (
        "ann4", "Debate Club Meeting Schedule",
        "New meeting schedule: Every Wednesday at 4PM in Room 205. Topics for next week available on our board.",
        "club4", "user2", 2,
    ),
    (
        "ann5", "General Club Updates",
        "Thank you to all club members for making this semester amazing! Keep up the great work.",
        "club1", "user1", 0,
    ),
]

# (id, club, user, age(days), message)
REQUESTS = [
    (
        "req-sample-1", "club2", "user3", 2,
        "I am passionate about photography and would love to join the club to improve my skills.",
    ),
    (
        "req-sample-2", "club3", "user2", 1,
        "I play guitar and piano, and would like to collaborate with other musicians.",
    ),
]


def seed_demo_data(db: Session) -> bool:
    """시드 데이터 적재. 이미 적재된 경우 아무것도 하지 않고 False 반환"""
    if db.scalar(select(User).where(User.is_seeded.is_(True)).limit(1)):
        logger.info("Seed data already present, skipping")
        return False

    now = utcnow()
    users = {}

    for uid, first, last, email, role in USERS:
        users[uid] = User(id=uid, first_name=first, last_name=last, email=email, role=role, is_seeded=True)
        db.add(users[uid])

    for cid, name, color in CATEGORIES:
        db.add(Category(id=cid, name=name, color=color))

    for index, (cid, name, desc, cat, admins, approval, members) in enumerate(CLUBS):
        db.add(
            Club(
                id=cid,
                name=name,
                description=desc,
                category_id=cat,
                admin_ids=list(admins),
                allow_joining=True,
                require_approval=approval,
                is_seeded=True,
                created_at=now - timedelta(days=30, minutes=-index),
            )
        )
        for uid in members:
            db.add(ClubMember(club_id=cid, user_id=uid, joined_at=now - timedelta(days=30)))

    for eid, title, desc, club_id, organizer, offset, hours, location, cap, status, attendees in EVENTS:
        starts = now + timedelta(days=offset)
        db.add(
            Event(
                id=eid,
                title=title,
                description=desc,
                club_id=club_id,
                organizer_id=organizer,
                starts_at=starts,
                ends_at=starts + timedelta(hours=hours),
                location=location,
                max_attendees=cap,
                status=status,
                is_seeded=True,
            )
        )
        for uid in attendees:
            db.add(EventAttendee(event_id=eid, user_id=uid))

    for aid, title, content, club_id, author, age in ANNOUNCEMENTS:
        db.add(
            Announcement(
                id=aid,
                title=title,
                content=content,
                club_id=club_id,
                author_id=author,
                created_at=now - timedelta(hours=age),
            )
        )

    for rid, club_id, uid, age, message in REQUESTS:
        user = users[uid]
        db.add(
            MembershipRequest(
                id=rid,
                club_id=club_id,
                user_id=uid,
                user_first_name=user.first_name,
                user_last_name=user.last_name,
                user_email=user.email,
                user_role=user.role.value,
                status=RequestStatus.PENDING,
                message=message,
                requested_at=now - timedelta(days=age),
            )
        )

    db.flush()
    logger.info(
        f"Seeded {len(USERS)} users, {len(CLUBS)} clubs, {len(EVENTS)} events, "
        f"{len(ANNOUNCEMENTS)} announcements, {len(REQUESTS)} membership requests"
    )
    return True
