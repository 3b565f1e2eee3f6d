from __future__ import annotations

from dataclasses import dataclass

from .activities.guard import TestAccountGuard
from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.repository import ActivityRepository
from .activities.service import ActivityService
from .database.connection import DBConfig, DatabaseConnection
from .rescues.mysql_rescue_repository import MySQLRescueRepository
from .rescues.repository import RescueRepository
from .rescues.service import RescueService
from .stats.service import StatsService
from .timezone.normalizer import CivilClock
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AccountService, AuthService, VolunteerRoster


@dataclass(frozen=True)
class Container:
    clock: CivilClock

    users_repo: UserRepository
    activities_repo: ActivityRepository
    rescues_repo: RescueRepository

    auth_service: AuthService
    account_service: AccountService
    activity_service: ActivityService
    rescue_service: RescueService
    stats_service: StatsService


def wire_services(
    *,
    clock: CivilClock,
    users_repo: UserRepository,
    activities_repo: ActivityRepository,
    rescues_repo: RescueRepository,
    roster: VolunteerRoster,
) -> Container:
    """Assemble services on top of raw repositories.

    Activity and rescue stores are wrapped by the test-account guard here, once,
    so every service sees the filtered view.
    """

    guard = TestAccountGuard(users_repo)
    activities = guard.guard_activities(activities_repo)
    rescues = guard.guard_rescues(rescues_repo)

    return Container(
        clock=clock,
        users_repo=users_repo,
        activities_repo=activities,
        rescues_repo=rescues,
        auth_service=AuthService(users_repo),
        account_service=AccountService(users_repo, roster),
        activity_service=ActivityService(activities, rescues, users_repo, clock),
        rescue_service=RescueService(rescues, users_repo, clock),
        stats_service=StatsService(activities, rescues, users_repo, clock),
    )


def build_container(*, db_config: dict, civil_timezone: str, roster: VolunteerRoster) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        clock=CivilClock(civil_timezone),
        users_repo=MySQLUserRepository(conn),
        activities_repo=MySQLActivityRepository(conn),
        rescues_repo=MySQLRescueRepository(conn),
        roster=roster,
    )
