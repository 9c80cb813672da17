import sys

from gridwords.core import main

sys.exit(main())
