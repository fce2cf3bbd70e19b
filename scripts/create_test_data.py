import sys
import os

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)  # relative imports

import asyncio
from datetime import date
from random import choice, randrange

from church_manager import create_app
from church_manager.models import Church, Member, MemberRole, MemberStatus

FIRST_NAMES = ["Anna", "Benjamin", "Clara", "Daniel", "Esther", "Gabriel", "Lydia", "Samuel"]
LAST_NAMES = ["Almeida", "Brown", "Costa", "Miller", "Santos", "Walker"]


async def create_test_churches(app):
    """Create test churches and return them"""
    church_specs = [
        ("Calvary Chapel", "Pr. John Walker"),
        ("Church of the Saviour", "Pr. Mary Brown"),
        ("Providence", "Pr. Paul Costa"),
    ]
    churches = []
    for name, pastor_name in church_specs:
        church = Church(
            name=name,
            pastor_name=pastor_name,
            founding_date=date(randrange(1950, 2015), 1, 1),
        )
        result = await app.church_service.create(church)
        if not result.is_successful:
            print(f"Error creating church {name}: {result.message}")
            continue
        churches.append(church)
    print(f"Created {len(churches)} test churches")
    return churches


async def create_test_members(app, church, count=8):
    """Create members of every status and role for a church"""
    statuses = list(MemberStatus)
    created = 0
    for i in range(count):
        member = Member(
            church_id=church.id,
            full_name=f"{choice(FIRST_NAMES)} {choice(LAST_NAMES)}",
            email=f"member{i+1}@{church.name.lower().replace(' ', '')}.test",
            role=MemberRole.PASTOR if i == 0 else choice(list(MemberRole)),
            status=statuses[i % len(statuses)],
            date_of_birth=date(randrange(1940, 2010), randrange(1, 13), randrange(1, 29)),
        )
        result = await app.member_service.create(member)
        if result.is_successful:
            created += 1
        else:
            print(f"Error creating member: {result.message}")
    print(f"Created {created} members for {church.name}")


async def main():
    app = create_app()
    try:
        await app.initialize()
        churches = await create_test_churches(app)
        for church in churches:
            await create_test_members(app, church)
            stats = await app.church_service.get_statistics(church.id)
            print(f"{church.name}: {stats.to_dict()}")
    finally:
        await app.close()


if __name__ == "__main__":
    asyncio.run(main())
