"""Enable execution via `python -m model_serializer`.

Prints the field accessor table of a record type.
"""

import sys

from model_serializer.describe import main

sys.exit(main())
