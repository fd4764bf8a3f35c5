"""Example: use the service layer directly (no Flask).

Lists what an instructor may mark, then prints the class summary of the first
class context found.
"""

import importlib

from config import get_settings_module

from src.lecture_attendance.lecture_attendance.container import build_container


def main(faculty_id: str = "fac_1"):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    resolver = container.resolver

    assignments = resolver.resolve_options(faculty_id)
    for branch in resolver.available_branches(assignments):
        for batch in resolver.available_batches(assignments, branch.id):
            for subject in resolver.available_subjects(assignments, branch.id, batch.id):
                print(f"{branch.name} / {batch.name} / {subject.name} ({subject.code})")
                for row in container.report_service.class_summary(branch.id, batch.id, subject.id):
                    print(f"  {row.roll_no:>4} {row.display_name:<20} {row.summary.pct:>3}% {row.standing.value}")
                return


if __name__ == "__main__":
    main()
