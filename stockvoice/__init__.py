"""stockvoice - voice command interpretation for small-shop inventory.

Turns speech-to-text transcripts ("add 2 kg rice on shelf 3 and 3 packets
of sugar for ₹30") into structured product intents for the inventory and
billing screens.
"""

from pathlib import Path

__version__ = "0.3.0"

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"

__all__ = [
    "ARGS_DIR",
    "PROJECT_ROOT",
    "__version__",
]
