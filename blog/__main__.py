import sys

from blog.app import main

sys.exit(main())
