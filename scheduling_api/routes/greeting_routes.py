from fastapi import APIRouter

router = APIRouter(tags=['greetings'])


@router.get('/greetings')
def custom_greetings():
    return {'greeting': 'hi'}
