import sys

from vtkdiff.run_diff import main

sys.exit(main())
