"""
Deterministic development seed for clubs, stadiums and players.
Idempotent: clubs are keyed by their unique name; existing clubs are left untouched.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from repositories.club_repo import ClubRepository
from schemas.club import ClubCreate

logger = logging.getLogger(__name__)

# Dev-only fixtures; member counts and addresses are approximate.
CLUBS: List[Dict[str, Any]] = [
    {
        "name": "FC Bayern München",
        "type": "PROFESSIONAL",
        "league": "Bundesliga",
        "country": "Germany",
        "memberCount": 300000,
        "website": "https://fcbayern.com",
        "email": "service@fcbayern.com",
        "phone": "+49-89-699310",
        "foundingDate": "1900-02-27",
        "keywords": ["TRADITION", "ACADEMY", "WOMEN"],
        "stadium": {"city": "München", "capacity": 75024, "street": "Werner-Heisenberg-Allee", "houseNumber": "25"},
        "players": [
            {"firstName": "Manuel", "lastName": "Neuer", "age": 38, "preferredFoot": "RIGHT"},
            {"firstName": "Joshua", "lastName": "Kimmich", "age": 29, "preferredFoot": "RIGHT"},
        ],
    },
    {
        "name": "Borussia Dortmund",
        "type": "PROFESSIONAL",
        "league": "Bundesliga",
        "country": "Germany",
        "memberCount": 218000,
        "website": "https://www.bvb.de",
        "foundingDate": "1909-12-19",
        "keywords": ["TRADITION", "ACADEMY"],
        "stadium": {"city": "Dortmund", "capacity": 81365, "street": "Strobelallee", "houseNumber": "50"},
        "players": [
            {"firstName": "Gregor", "lastName": "Kobel", "age": 26, "preferredFoot": "RIGHT"},
        ],
    },
    {
        "name": "Karlsruher SC",
        "type": "PROFESSIONAL",
        "league": "2. Bundesliga",
        "country": "Germany",
        "memberCount": 15000,
        "website": "https://www.ksc.de",
        "foundingDate": "1894-06-06",
        "keywords": ["TRADITION"],
        "stadium": {"city": "Karlsruhe", "capacity": 34302, "street": "Adenauerring", "houseNumber": "17"},
        "players": [],
    },
    {
        "name": "SV Sandhausen",
        "type": "SEMI_PROFESSIONAL",
        "league": "3. Liga",
        "country": "Germany",
        "memberCount": 1200,
        "foundingDate": "1916-08-01",
        "stadium": {"city": "Sandhausen", "capacity": 15414},
    },
    {
        "name": "FC Bayern Alzenau",
        "type": "AMATEUR",
        "league": "Hessenliga",
        "country": "Germany",
        "memberCount": 900,
        "foundingDate": "1920-01-01",
        "keywords": ["WOMEN", "ESPORTS"],
    },
    {
        "name": "Red Bull Salzburg",
        "type": "PROFESSIONAL",
        "league": "Bundesliga",
        "country": "Austria",
        "memberCount": 4000,
        "foundingDate": "1933-09-13",
        "keywords": ["ACADEMY", "ESPORTS"],
        "stadium": {"city": "Wals-Siezenheim", "capacity": 30188},
    },
]


async def seed_clubs(session: AsyncSession) -> Dict[str, int]:
    """Insert missing seed clubs; returns counts of created and skipped clubs."""
    repo = ClubRepository(session)
    created = 0
    skipped = 0
    for data in CLUBS:
        club_in = ClubCreate.model_validate(data)
        if await repo.find_by_name(club_in.name) is not None:
            skipped += 1
            continue
        club = await repo.create(club_in.to_entity())
        logger.debug("seed_clubs: created %s (id=%d)", club.name, club.id)
        created += 1
    return {"created": created, "skipped": skipped}
