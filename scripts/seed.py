"""Database seeder for local development of the blog API."""
import asyncio
import argparse
import logging
import random
import time
from datetime import datetime, timezone, timedelta
from blog_api.config import settings
from blog_api.database import engine, async_session, Base
from blog_api.logging_config import setup_logging
from blog_api.models import User, Post, Comment
from blog_api.security import hash_password

logger = logging.getLogger("seed")

TOPICS = ["python", "fastapi", "postgresql", "sqlalchemy", "docker", "testing",
          "asyncio", "pydantic", "alembic", "rest-api"]

REMARKS = ["Nice write-up.", "Thanks, this helped.", "Could you expand on the last part?",
           "Bookmarked.", "I ran into the same issue last week."]

async def seed(small: bool = False):
    num_users = 5 if small else 50
    num_posts = 20 if small else 2000
    max_comments_per_post = 2 if small else 6

    logger.info("Seeding: %d users, %d posts, up to %d comments per post",
                num_users, num_posts, max_comments_per_post)
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        # Shared digest for all seeded users
        password_hash = hash_password("password1")
        users = []
        for i in range(num_users):
            user = User(
                username=f"user_{i:04d}",
                email=f"user_{i:04d}@example.com",
                password_hash=password_hash,
            )
            session.add(user)
            users.append(user)
        await session.flush()
        logger.info("Created %d users", len(users))

        now = datetime.now(timezone.utc)
        batch_size = 500
        total_comments = 0
        for batch_start in range(0, num_posts, batch_size):
            batch_end = min(batch_start + batch_size, num_posts)
            posts = []
            for i in range(batch_start, batch_end):
                created = now - timedelta(days=random.randint(0, 365), minutes=random.randint(0, 1440))
                topic = random.choice(TOPICS)
                post = Post(
                    title=f"Post {i}: notes on {topic}",
                    content=f"This is the body of post {i} about {topic}. " * 10,
                    created_at=created,
                    author=random.choice(users),
                )
                session.add(post)
                posts.append(post)
            await session.flush()

            for post in posts:
                for n in range(random.randint(0, max_comments_per_post)):
                    session.add(Comment(
                        content=random.choice(REMARKS),
                        created_at=post.created_at + timedelta(minutes=10 * (n + 1)),
                        author=random.choice(users),
                        post=post,
                    ))
                    total_comments += 1
            await session.flush()
            logger.info("Batch %d-%d: posts created", batch_start, batch_end)

        await session.commit()

    elapsed = time.perf_counter() - start
    logger.info("Seeding complete in %.1fs: %d users, %d posts, %d comments",
                elapsed, num_users, num_posts, total_comments)


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset (20 posts)")
    args = parser.parse_args()
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
