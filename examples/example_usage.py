"""Example: call the service layer directly (no Flask).

Prints this month's stats and breakdown for one volunteer.
"""

import importlib
import sys

from config import get_settings_module

from src.volunteer_duty.volunteer_duty.container import build_container
from src.volunteer_duty.volunteer_duty.users.service import VolunteerRoster


def main(user_id: int = 1):
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        civil_timezone=settings.CIVIL_TIMEZONE,
        roster=VolunteerRoster.build(volunteer_names=settings.VOLUNTEER_NAMES, admin_names=settings.ADMIN_NAMES),
    )
    print(container.stats_service.get_stats(user_id).to_dict())
    for row in container.activity_service.get_monthly_activities(user_id):
        print(row.to_dict())


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 1)
