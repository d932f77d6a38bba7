"""
Create MongoDB indexes for the pitch pipeline collections.

Usage:
    python scripts/setup_indexes.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitchprep.common.logger import setup_logging
from pitchprep.common.repositories import (
    get_company_repository,
    get_employer_context_repository,
    get_pitch_history_repository,
    reset_repositories,
)


def main():
    setup_logging()

    try:
        repositories = {
            "employer_contexts": get_employer_context_repository(),
            "pitches": get_pitch_history_repository(),
            "companies": get_company_repository(),
        }
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)

    try:
        for name, repository in repositories.items():
            repository.ensure_indexes()
            print(f"  ✓ {name}")
    finally:
        reset_repositories()

    print("✅ Indexes ready")


if __name__ == "__main__":
    main()
