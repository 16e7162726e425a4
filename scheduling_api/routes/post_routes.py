from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel
from sqlalchemy.orm import Session

from scheduling_api.database import get_db
from scheduling_api.services import posts
from scheduling_api.services.errors import ServiceError

router = APIRouter(tags=['posts'])


class PostLikesResponse(BaseModel):
    post_id: int
    likes: int


class PostVisitsResponse(BaseModel):
    post_id: int
    visits: int


class PostVisitResponse(BaseModel):
    id: int
    title: str
    thumbnail: str
    url: str
    visits: int

    class Config:
        from_attributes = True


@router.post('/likes/{post_id}', response_model=PostLikesResponse)
def increase_post_likes(post_id: int = Path(..., ge=0), db: Session = Depends(get_db)):
    try:
        likes = posts.increment_likes(db, post_id)
    except ServiceError as exc:
        raise exc.to_http() from exc

    return PostLikesResponse(post_id=post_id, likes=likes)


@router.post('/visits/{post_id}', response_model=PostVisitsResponse)
def increase_post_visits(post_id: int = Path(..., ge=0), db: Session = Depends(get_db)):
    try:
        visits = posts.increment_visits(db, post_id)
    except ServiceError as exc:
        raise exc.to_http() from exc

    return PostVisitsResponse(post_id=post_id, visits=visits)


@router.get('/visits', response_model=list[PostVisitResponse])
def get_post_most_visits(db: Session = Depends(get_db)):
    return [PostVisitResponse.model_validate(post) for post in posts.most_visited(db)]
