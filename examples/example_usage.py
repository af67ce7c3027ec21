"""Example: use the service layer directly (no scheduler involved).

Prints one worker's habit dashboard and their reward evaluation for this month.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from workers_management.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, smtp_config=settings.SMTP_CONFIG)

    dashboard = container.habit_service.get_dashboard(worker_id=1)
    for item in dashboard.habits:
        print(item.message)

    result = container.reward_service.evaluate(worker_id=1)
    print(result.period, result.counts.as_dict(), "qualifies" if result.qualifies else result.shortfalls)


if __name__ == "__main__":
    main()
