import sys

from poke_reviewer.main import main

sys.exit(main())
