"""
Create a user without going through the API. Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD
Example:
  python -m app.scripts.create_user alice alice@example.com your-secure-password
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.exceptions import ExpenseTrackerError
from app.services.users import register_user


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    parser = argparse.ArgumentParser(description="Create an expense tracker user.")
    parser.add_argument("username", help="Username (unique)")
    parser.add_argument("email", help="Email address (unique, used to log in)")
    parser.add_argument("password", help="Password")
    args = parser.parse_args(argv)

    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        user = register_user(
            db,
            args.username,
            args.email,
            args.password,
            rounds=settings.BCRYPT_ROUNDS,
        )
        print(f"Created user '{user.username}' <{user.email}> with id {user.id}.")
        return 0
    except ExpenseTrackerError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
