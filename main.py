"""daylog — daily journal parser and charts."""

import sys
from daylog.app import create_app


def main():
    app = create_app()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
