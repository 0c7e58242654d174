import sys

from met_predictor.cli import main

sys.exit(main())
