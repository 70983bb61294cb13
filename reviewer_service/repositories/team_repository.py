# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team directory.
Teams and their members; members are stored as users rows.
NO business rules here, pure data access.
"""

from sqlalchemy import exists as sql_exists, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from reviewer_service.models.domain import Team, TeamMember
from reviewer_service.repositories.errors import (
    TeamAlreadyExistsError,
    TeamNotFoundError,
    is_unique_violation,
)
from reviewer_service.repositories.tables import teams, users

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class TeamRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create_with_members(self, team: Team) -> None:
        """Insert the team and upsert every member into it, atomically."""
        with self._engine.begin() as conn:
            try:
                conn.execute(insert(teams).values(team_name=team.team_name))
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    raise TeamAlreadyExistsError(team.team_name) from exc
                raise
            for member in team.members:
                self._upsert_member(conn, team.team_name, member)

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_name(self, team_name: str) -> Team:
        with self._engine.connect() as conn:
            return self._load(conn, team_name)

    def get_by_user_id(self, user_id: str) -> Team:
        with self._engine.connect() as conn:
            team_name = conn.execute(
                select(users.c.team_name).where(users.c.user_id == user_id)
            ).scalar_one_or_none()
            if team_name is None:
                raise TeamNotFoundError(f"no team for user {user_id}")
            return self._load(conn, team_name)

    # ── Private ────────────────────────────────────────────────────────

    def _load(self, conn: Connection, team_name: str) -> Team:
        if not self._exists(conn, team_name):
            raise TeamNotFoundError(team_name)
        rows = conn.execute(
            select(users.c.user_id, users.c.username, users.c.is_active)
            .where(users.c.team_name == team_name)
            .order_by(users.c.user_id)
        ).fetchall()
        return Team(
            team_name=team_name,
            members=[
                TeamMember(user_id=r.user_id, username=r.username, is_active=r.is_active)
                for r in rows
            ],
        )

    @staticmethod
    def _exists(conn: Connection, team_name: str) -> bool:
        return bool(conn.execute(
            select(sql_exists().where(teams.c.team_name == team_name))
        ).scalar())

    @staticmethod
    def _upsert_member(conn: Connection, team_name: str, member: TeamMember) -> None:
        dialect_insert = _DIALECT_INSERTS[conn.dialect.name]
        stmt = dialect_insert(users).values(
            user_id=member.user_id,
            username=member.username,
            team_name=team_name,
            is_active=member.is_active,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[users.c.user_id],
            set_={
                "username": stmt.excluded.username,
                "team_name": stmt.excluded.team_name,
                "is_active": stmt.excluded.is_active,
            },
        )
        conn.execute(stmt)
