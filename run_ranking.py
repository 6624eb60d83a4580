#!/usr/bin/env python3
import sys

from admitrank.application.use_cases.rank_applicants import RankApplicantsUseCase
from admitrank.config.config import settings
from admitrank.config.logger import logger
from admitrank.infrastructure.snapshot import load_snapshot, ranked_to_rows
from admitrank.services.admission_summary import group_by_program


def main() -> None:
    logger.info("=== Admission ranking ===")
    path = sys.argv[1] if len(sys.argv) > 1 else settings.snapshot_path

    try:
        snapshot = load_snapshot(path)
        logger.info("Snapshot %s: %d applicants, %d programs, %d subjects",
                    path, len(snapshot.applicants), len(snapshot.programs), len(snapshot.subjects))

        use_case = RankApplicantsUseCase(
            subjects=snapshot.subjects,
            programs=snapshot.programs,
            policy=snapshot.policy,
        )
        ranked, summary = use_case.execute_with_summary(snapshot.applicants)
    except Exception as exc:
        logger.exception("Ranking failed: %s", exc)
        print("❌ Ranking failed:", exc, file=sys.stderr)
        sys.exit(1)

    groups, waitlist = group_by_program(ranked, snapshot.programs)
    for fill in summary.program_fill:
        print(f"\n{fill.program}: {fill.admitted}/{fill.quota} ({fill.percent:.0f}%)")
        for r in groups.get(fill.program, []):
            print(f"  #{r.rank:<4} {r.id:<10} {r.full_name:<30} {r.total_score:g}")

    print(f"\nWaiting list: {len(waitlist)}")
    for row in ranked_to_rows(waitlist):
        print(f"  #{row['rank']:<4} {row['id']:<10} {row['name']:<30} {row['total_score']:g}")

    print(f"\n✅ Ranked {summary.total_applicants} applicants: "
          f"admitted {summary.admitted_count}, waiting {summary.waitlisted_count}, "
          f"average total {summary.average_total}, best {summary.max_total:g}")


if __name__ == "__main__":
    main()
