import sys
from pathlib import Path


def main():
    project_root = Path(__file__).parent.resolve()
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    from dotenv import load_dotenv
    # Load .env before any module logger is created so LOG_LEVEL from it applies
    load_dotenv()

    # -env and the subcommands are handled by the todo-highlight CLI
    from src.todo_highlight.cli import main as cli_main
    raise SystemExit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
