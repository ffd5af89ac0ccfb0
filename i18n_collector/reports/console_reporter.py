"""Console report generator."""

from typing import List, Optional

from ..core.aggregator import KeyCollision
from ..features.diff import DiffResult
from ..utils.colors import Colors


class ConsoleReporter:
    """Print a fragment diff summary to the terminal."""

    @staticmethod
    def print_full_report(
        result: DiffResult,
        collisions: Optional[List[KeyCollision]] = None,
        show_details: bool = False,
        limit: int = 10
    ):
        """
        Print the summary, and the changed fragments when asked.

        Args:
            result: Diff result
            collisions: Key collisions seen while aggregating
            show_details: List added/removed fragments and collisions
            limit: Maximum entries per section
        """
        ConsoleReporter._print_header()
        ConsoleReporter._print_summary(result)

        if show_details:
            ConsoleReporter._print_values('➕ ADDED', result.added, Colors.added, limit)
            ConsoleReporter._print_values('❌ REMOVED', result.removed, Colors.removed, limit)
            ConsoleReporter._print_collisions(collisions or [], limit)

    @staticmethod
    def _print_header():
        print("\n" + "=" * 70)
        print(f"{Colors.bold('🌍 I18N FRAGMENT REPORT')}")
        print("=" * 70)

    @staticmethod
    def _print_summary(result: DiffResult):
        label = 'Same' if result.has_differences else 'Total'
        print(f"Added:   {len(result.added)}")
        print(f"Removed: {len(result.removed)}")
        print(f"{label + ':':<9}{len(result.common)}")

    @staticmethod
    def _print_values(title: str, values: List[str], style, limit: int):
        if not values:
            return

        print(f"\n{Colors.bold(title)} ({len(values)})")
        print("-" * 70)
        for value in values[:limit]:
            print(f"  {style(value)}")
        if len(values) > limit:
            print(f"  ... and {len(values) - limit} more")

    @staticmethod
    def _print_collisions(collisions: List[KeyCollision], limit: int):
        if not collisions:
            return

        print(f"\n{Colors.bold('⚠️  KEY COLLISIONS')} ({len(collisions)})")
        print("-" * 70)
        for collision in collisions[:limit]:
            print(f"  {collision.key}")
            print(f"    {collision.previous_module}: \"{collision.previous_value}\"")
            print(f"    {collision.module}: \"{collision.value}\" (kept)")
        if len(collisions) > limit:
            print(f"  ... and {len(collisions) - limit} more")
