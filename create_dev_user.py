import asyncio
import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

from src.config import settings
from src.infra.database import get_db

DEV_USERS = [
    # id, username, full_name, is_admin
    (1, "dispatcher", "Dev Dispatcher", True),
    (2, "citizen", "Dev Citizen", False),
]


async def main():
    db = get_db()
    await db.connect(
        dsn=settings.database.dsn,
        min_size=1,
        max_size=1,
        retry_attempts=settings.database.DB_RETRY_ATTEMPTS,
        retry_delay=settings.database.DB_RETRY_DELAY,
    )

    print("Connected to DB")

    for user_id, username, full_name, is_admin in DEV_USERS:
        await db.execute(
            """
            INSERT INTO users (id, username, full_name, is_admin)
            VALUES ($1, $2, $3, $4)
            ON CONFLICT (id) DO NOTHING
            """,
            user_id, username, full_name, is_admin,
        )
        print(f"User {user_id} ({username}) created")

    # BIGSERIAL не знает о явно вставленных id
    await db.execute("SELECT setval('users_id_seq', GREATEST((SELECT MAX(id) FROM users), 1))")

    await db.disconnect()

if __name__ == "__main__":
    asyncio.run(main())
