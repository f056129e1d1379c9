"""Team service: crew member records."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from conexpro.exceptions import RecordNotFoundError
from conexpro.models.enums import Collection, TeamMemberRole
from conexpro.models.job import TeamMember

if TYPE_CHECKING:
    from collections.abc import Callable

    from conexpro.store.base import DocumentStore, Record, Unsubscribe

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def list_members(self) -> list[TeamMember]:
        records = await self._store.list_all(Collection.TEAM_MEMBERS)
        return sorted(
            (TeamMember.model_validate(r) for r in records),
            key=lambda m: m.name.lower(),
        )

    async def get_member(self, member_id: str) -> TeamMember:
        record = await self._store.get(Collection.TEAM_MEMBERS, member_id)
        if record is None:
            raise RecordNotFoundError(Collection.TEAM_MEMBERS, member_id)
        return TeamMember.model_validate(record)

    async def add_member(
        self,
        name: str,
        role: TeamMemberRole = TeamMemberRole.LABORER,
        avatar_url: str = "",
    ) -> TeamMember:
        member = TeamMember(id=uuid.uuid4().hex, name=name, role=role, avatar_url=avatar_url)
        await self._save(member)
        logger.info("Added team member %s (%s)", member.name, member.role)
        return member

    async def update_member(self, member: TeamMember) -> TeamMember:
        await self.get_member(member.id)
        await self._save(member)
        return member

    async def delete_member(self, member_id: str) -> None:
        await self._store.delete(Collection.TEAM_MEMBERS, member_id)
        logger.info("Deleted team member %s", member_id)

    def observe_members(self, listener: Callable[[list[TeamMember]], None]) -> Unsubscribe:
        def on_records(records: list[Record]) -> None:
            listener([TeamMember.model_validate(r) for r in records])

        return self._store.subscribe(Collection.TEAM_MEMBERS, on_records)

    async def _save(self, member: TeamMember) -> None:
        await self._store.set(
            Collection.TEAM_MEMBERS,
            member.id,
            member.model_dump(mode="json", by_alias=True),
        )
