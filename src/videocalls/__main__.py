"""Run the videocalls API server: python -m videocalls"""

from videocalls.server import main

if __name__ == "__main__":
    main()
