"""Like and visit counters for posts."""

from sqlalchemy import update
from sqlalchemy.orm import Session

from scheduling_api.models.post import Post
from scheduling_api.services.errors import PostNotFoundError

MOST_VISITED_LIMIT = 10


def _increment(db: Session, post_id: int, column) -> int:
    result = db.execute(
        update(Post).where(Post.id == post_id).values({column: column + 1})
    )
    if result.rowcount == 0:
        db.rollback()
        raise PostNotFoundError(post_id)

    db.commit()
    return db.query(column).filter(Post.id == post_id).scalar()


def increment_likes(db: Session, post_id: int) -> int:
    return _increment(db, post_id, Post.likes)


def increment_visits(db: Session, post_id: int) -> int:
    return _increment(db, post_id, Post.visits)


def most_visited(db: Session, limit: int = MOST_VISITED_LIMIT) -> list[Post]:
    return db.query(Post).order_by(
        Post.visits.desc(),
        Post.id.asc(),
    ).limit(limit).all()
