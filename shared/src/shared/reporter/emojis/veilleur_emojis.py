"""
Veilleur emoji definitions.

Emojis for build emissions, seeding, debouncing and test runs.
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class VeilleurEmoji(ComponentEmoji):
    """
    Incremental test re-execution emojis.

    Categories:
        - Emissions: Build pipeline events
        - Seed: One-shot seed initialization
        - Scheduling: Debounce window handling
        - Runs: Test execution and results
    """

    # ============================================================
    # Emissions
    # ============================================================
    EMISSION = "📦"  # Build emission received
    CHANGED = "📝"  # Changed test units
    UNCHANGED = "💤"  # Nothing changed

    # ============================================================
    # Seed
    # ============================================================
    SEED = "🌱"  # Seed initialization started
    SEED_READY = "🌳"  # Seed resolved
    SEED_FAILED = "🥀"  # Seed failed

    # ============================================================
    # Scheduling
    # ============================================================
    SCHEDULED = "⏳"  # Run scheduled
    SUPERSEDED = "⏭️"  # Pending run replaced by a newer one
    CANCELLED = "⏹️"  # Pending run dropped on close

    # ============================================================
    # Runs
    # ============================================================
    TEST_RUN = "🔬"  # Test runner active
    TEST_FILE = "📄"  # Loaded test file
    TEST_PASS = "✅"  # Run passed
    TEST_FAIL = "❌"  # Run failed
    TEST_ERROR = "💥"  # Run crashed
    INFO = "ℹ️"  # Information
