"""
CLI Entry Point: Generate a Career Fair Pitch

Usage:
    python scripts/generate_pitch.py --user-id 665f1c2e9b1e8a0012345678 --company "Acme Corp"
    python scripts/generate_pitch.py --user-id ... --company "Acme Corp" --company-id c-42 --refresh
    python scripts/generate_pitch.py --user-id ... --company "Acme Corp" --json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitchprep.common.config import Config
from pitchprep.common.error_handling import PitchPrepError
from pitchprep.common.logger import set_global_debug_mode, setup_logging
from pitchprep.common.types import SCORE_CATEGORY_LABELS, PitchArtifact
from pitchprep.services import PitchGenerationService


def print_card(artifact: PitchArtifact) -> None:
    """Print a pitch artifact as a readable career fair card."""
    print("\n" + "=" * 70)
    print(f"CAREER FAIR CARD: {artifact.company_name}")
    print("=" * 70)

    print(f"\nMatch score: {artifact.match_score}/120")
    for category, sub in artifact.score_breakdown.items():
        label = SCORE_CATEGORY_LABELS[category]
        print(f"  {label:<20} {sub.score:>2}/20  {sub.reason}")

    print("\n30-second pitch:")
    print(f"  {artifact.pitch}")

    if artifact.facts:
        print("\nTalking points:")
        for fact in artifact.facts:
            print(f"  - {fact.fact} ({fact.source})")

    if artifact.top_roles:
        print("\nRoles to ask about:")
        for role in artifact.top_roles:
            print(f"  - {role}")

    if artifact.smart_questions:
        print("\nQuestions to ask:")
        for question in artifact.smart_questions:
            print(f"  - {question}")

    print("\nFollow-up message:")
    print(f"  {artifact.follow_up_message}")
    print()


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Generate a personalized career fair pitch for one company"
    )
    parser.add_argument("--user-id", required=True, help="User id (users collection _id)")
    parser.add_argument("--company", required=True, help="Company display name")
    parser.add_argument("--company-id", default=None, help="Company record id to refresh")
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Refetch employer research even if cached",
    )
    parser.add_argument("--json", action="store_true", help="Print the raw artifact as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        set_global_debug_mode(True)
    setup_logging(Config.LOG_LEVEL, Config.LOG_FORMAT)

    try:
        print("🔍 Validating configuration...")
        Config.validate()
        print("✅ Configuration valid")
        print(Config.summary() + "\n")

        service = PitchGenerationService()
        artifact = asyncio.run(
            service.generate_pitch(
                args.user_id,
                args.company,
                company_id=args.company_id,
                force_refresh=args.refresh,
            )
        )
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)
    except PitchPrepError as e:
        print(f"❌ {type(e).__name__}: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(artifact.to_dict(), indent=2))
    else:
        print_card(artifact)


if __name__ == "__main__":
    main()
