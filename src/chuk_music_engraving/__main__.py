"""Allow `python -m chuk_music_engraving`."""

import sys

from chuk_music_engraving.cli import main

sys.exit(main())
