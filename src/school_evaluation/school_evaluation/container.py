from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .access.policy import AccessPolicy
from .database.connection import DBConfig, DatabaseConnection
from .evaluations.mysql_evaluation_repository import MySQLEvaluationRepository
from .evaluations.repository import EvaluationRepository
from .evaluations.service import EvaluationService
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterProvider


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    evaluations_repo: EvaluationRepository
    roster_repo: RosterProvider

    access_policy: AccessPolicy
    evaluation_service: EvaluationService


def build_container(
    *,
    db_config: Optional[dict] = None,
    evaluations_repo: Optional[EvaluationRepository] = None,
    roster_repo: Optional[RosterProvider] = None,
    access_policy: Optional[AccessPolicy] = None,
) -> Container:
    """Wire repositories and services.

    Repositories default to MySQL (requires `db_config`); tests pass in-memory ones.
    """

    conn = None
    if evaluations_repo is None or roster_repo is None:
        if db_config is None:
            raise ValueError("db_config is required when repositories are not supplied")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    evaluations_repo = evaluations_repo or MySQLEvaluationRepository(conn)
    roster_repo = roster_repo or MySQLRosterRepository(conn)
    access_policy = access_policy or AccessPolicy()

    evaluation_service = EvaluationService(evaluations_repo, roster_repo, policy=access_policy)

    return Container(
        conn=conn,
        evaluations_repo=evaluations_repo,
        roster_repo=roster_repo,
        access_policy=access_policy,
        evaluation_service=evaluation_service,
    )
