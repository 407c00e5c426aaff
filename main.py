import sys

from knowledge_graph.launcher import main


if __name__ == "__main__":
    sys.exit(main())
