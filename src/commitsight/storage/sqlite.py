"""SQLModel-based SQLite profile store."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import TypeAdapter
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Session, SQLModel, create_engine, delete, select

from commitsight.models.github import GitHubUser, Repository
from commitsight.models.profile import ProfileSummary, UserProfile
from commitsight.models.skill import Skill, SkillCategory, SkillEvidence, SkillRating, SkillTrend

if TYPE_CHECKING:
    from pathlib import Path

_REPOSITORIES = TypeAdapter(list[Repository])


class UserDB(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    github_id: int
    name: str | None = None
    email: str | None = None
    avatar_url: str = ""
    bio: str | None = None
    company: str | None = None
    location: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime
    updated_at: datetime


class ProfileDB(SQLModel, table=True):
    __tablename__ = "profiles"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, unique=True)
    total_commits_analyzed: int = 0
    analysis_date: datetime = Field(index=True)
    summary_json: str
    repositories_json: str


class SkillDB(SQLModel, table=True):
    __tablename__ = "skills"
    __table_args__ = (UniqueConstraint("name", "category"),)

    id: int | None = Field(default=None, primary_key=True)
    slug: str = Field(index=True)
    name: str = Field(index=True)
    category: str
    aliases_json: str = "[]"


class SkillRatingDB(SQLModel, table=True):
    __tablename__ = "skill_ratings"

    id: int | None = Field(default=None, primary_key=True)
    profile_id: int = Field(foreign_key="profiles.id", index=True)
    skill_id: int = Field(foreign_key="skills.id", index=True)
    proficiency_score: int
    confidence: float
    trend: str
    percentile_rank: int | None = None
    commit_count: int = 0
    total_lines_changed: int = 0
    first_seen: datetime
    last_seen: datetime
    repositories_json: str = "[]"


def _create_engine(path: Path):  # noqa: ANN202
    """Create SQLite engine."""
    path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{path}", echo=False)


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo; stored values are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class ProfileStore:
    """Persist and reload analyzed profiles.

    ``save`` upserts the user by username and the profile by user, upserts each
    rated skill by name and category, and replaces the profile's ratings.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.engine = _create_engine(path)
        SQLModel.metadata.create_all(self.engine)

    def close(self) -> None:
        self.engine.dispose()

    def save(self, profile: UserProfile) -> None:
        now = datetime.now(UTC)
        user = profile.user
        with Session(self.engine) as session:
            user_row = session.exec(select(UserDB).where(UserDB.username == user.login)).first()
            if user_row is None:
                user_row = UserDB(username=user.login, github_id=user.id, created_at=user.created_at, updated_at=now)
            user_row.sqlmodel_update(
                {
                    "github_id": user.id,
                    "name": user.name,
                    "email": user.email,
                    "avatar_url": user.avatar_url,
                    "bio": user.bio,
                    "company": user.company,
                    "location": user.location,
                    "public_repos": user.public_repos,
                    "followers": user.followers,
                    "following": user.following,
                    "created_at": user.created_at,
                    "updated_at": now,
                }
            )
            session.add(user_row)
            session.flush()

            profile_row = session.exec(select(ProfileDB).where(ProfileDB.user_id == user_row.id)).first()
            summary_json = profile.summary.model_dump_json()
            repositories_json = _REPOSITORIES.dump_json(profile.repositories).decode()
            if profile_row is None:
                profile_row = ProfileDB(
                    user_id=user_row.id,
                    analysis_date=profile.analysis_date,
                    summary_json=summary_json,
                    repositories_json=repositories_json,
                )
            profile_row.total_commits_analyzed = profile.total_commits_analyzed
            profile_row.analysis_date = profile.analysis_date
            profile_row.summary_json = summary_json
            profile_row.repositories_json = repositories_json
            session.add(profile_row)
            session.flush()

            session.exec(delete(SkillRatingDB).where(SkillRatingDB.profile_id == profile_row.id))  # type: ignore[arg-type]

            for rating in profile.skills:
                skill_row = self._upsert_skill(session, rating.skill)
                session.add(
                    SkillRatingDB(
                        profile_id=profile_row.id,
                        skill_id=skill_row.id,
                        proficiency_score=rating.proficiency_score,
                        confidence=rating.confidence,
                        trend=str(rating.trend),
                        percentile_rank=rating.percentile_rank,
                        commit_count=rating.evidence.commit_count,
                        total_lines_changed=rating.evidence.total_lines_changed,
                        first_seen=rating.evidence.first_seen,
                        last_seen=rating.evidence.last_seen,
                        repositories_json=json.dumps(rating.evidence.repositories),
                    )
                )
            session.commit()
        logger.info("Saved profile for {} ({} skills)", user.login, len(profile.skills))

    @staticmethod
    def _upsert_skill(session: Session, skill: Skill) -> SkillDB:
        row = session.exec(
            select(SkillDB).where(SkillDB.name == skill.name, SkillDB.category == str(skill.category))
        ).first()
        if row is None:
            row = SkillDB(slug=skill.id, name=skill.name, category=str(skill.category))
        row.slug = skill.id
        row.aliases_json = json.dumps(list(skill.aliases))
        session.add(row)
        session.flush()
        return row

    def load(self, username: str) -> UserProfile | None:
        with Session(self.engine) as session:
            user_row = session.exec(select(UserDB).where(UserDB.username == username)).first()
            if user_row is None:
                return None
            profile_row = session.exec(select(ProfileDB).where(ProfileDB.user_id == user_row.id)).first()
            if profile_row is None:
                return None
            rows = session.exec(
                select(SkillRatingDB, SkillDB)
                .join(SkillDB, SkillRatingDB.skill_id == SkillDB.id)  # type: ignore[arg-type]
                .where(SkillRatingDB.profile_id == profile_row.id)
            ).all()

            ratings = [
                SkillRating(
                    skill=Skill(
                        id=skill_row.slug,
                        name=skill_row.name,
                        category=SkillCategory(skill_row.category),
                        aliases=tuple(json.loads(skill_row.aliases_json)),
                    ),
                    proficiency_score=rating_row.proficiency_score,
                    confidence=rating_row.confidence,
                    evidence=SkillEvidence(
                        commit_count=rating_row.commit_count,
                        total_lines_changed=rating_row.total_lines_changed,
                        first_seen=_as_utc(rating_row.first_seen),
                        last_seen=_as_utc(rating_row.last_seen),
                        repositories=json.loads(rating_row.repositories_json),
                    ),
                    trend=SkillTrend(rating_row.trend),
                    percentile_rank=rating_row.percentile_rank,
                )
                for rating_row, skill_row in rows
            ]
            ratings.sort(key=lambda r: (-r.proficiency_score, r.skill.name.casefold()))

            user = GitHubUser(
                login=user_row.username,
                id=user_row.github_id,
                name=user_row.name,
                email=user_row.email,
                avatar_url=user_row.avatar_url,
                bio=user_row.bio,
                company=user_row.company,
                location=user_row.location,
                public_repos=user_row.public_repos,
                followers=user_row.followers,
                following=user_row.following,
                created_at=_as_utc(user_row.created_at),
            )
            return UserProfile(
                user=user,
                repositories=_REPOSITORIES.validate_json(profile_row.repositories_json),
                total_commits_analyzed=profile_row.total_commits_analyzed,
                analysis_date=_as_utc(profile_row.analysis_date),
                skills=ratings,
                summary=ProfileSummary.model_validate_json(profile_row.summary_json),
            )

    def list_profiles(self) -> list[str]:
        """Usernames with a stored profile, most recently analyzed first."""
        with Session(self.engine) as session:
            rows = session.exec(
                select(UserDB.username)
                .join(ProfileDB, ProfileDB.user_id == UserDB.id)  # type: ignore[arg-type]
                .order_by(ProfileDB.analysis_date.desc())  # type: ignore[attr-defined]
            ).all()
            return list(rows)

    def percentile(self, skill_name: str, score: int, *, exclude_username: str | None = None) -> int | None:
        """Share (0-100) of stored ratings for ``skill_name`` strictly below ``score``.

        Returns None when no other rating of that skill is stored.
        """
        with Session(self.engine) as session:
            query = (
                select(SkillRatingDB.proficiency_score)
                .join(SkillDB, SkillRatingDB.skill_id == SkillDB.id)  # type: ignore[arg-type]
                .where(SkillDB.name == skill_name)
            )
            if exclude_username is not None:
                query = (
                    query.join(ProfileDB, SkillRatingDB.profile_id == ProfileDB.id)  # type: ignore[arg-type]
                    .join(UserDB, ProfileDB.user_id == UserDB.id)  # type: ignore[arg-type]
                    .where(UserDB.username != exclude_username)
                )
            scores = session.exec(query).all()
        if not scores:
            return None
        below = sum(1 for stored in scores if stored < score)
        return round(below * 100 / len(scores))
