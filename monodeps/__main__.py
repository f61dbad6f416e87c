import sys

from monodeps.main import main

sys.exit(main())
