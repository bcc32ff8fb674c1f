"""Create a user record so GET /cats/token can embed its role.

    python scripts/seed_user.py "Ada" ada@example.com --role admin
"""

import argparse
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.user_repository import MongoUserRepository
from utils.config import ConfigService, default_env_file


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user in the cats database")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("email", help="Unique email address, used as the token subject")
    parser.add_argument("--role", default=None, help="Role claim embedded in issued tokens (e.g. admin)")
    parser.add_argument(
        "--env-file",
        default=None,
        help="Env file to read MONGO_URL and MONGODB_DATABASE from (defaults to ENV_FILE or <APP_ENV>.env)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    config = ConfigService(args.env_file or default_env_file())

    client = get_mongodb_client(config.get("MONGO_URL"))
    if client is None:
        print("Error: MongoDB is not configured or unreachable (set MONGO_URL).", file=sys.stderr)
        return 1

    repo = MongoUserRepository(client[config.get("MONGODB_DATABASE", "cats")])
    repo.ensure_indexes()
    user = repo.create(args.email.strip().lower(), args.name.strip(), role=args.role)
    if user is None:
        print(f"Error: could not create user {args.email} (already exists?)", file=sys.stderr)
        return 1

    print(f"Created user {user.id}: {user.name} <{user.email}> role={user.role or '-'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
