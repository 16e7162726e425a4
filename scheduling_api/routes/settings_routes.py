from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scheduling_api.database import get_db
from scheduling_api.services import options
from scheduling_api.services.options import HomeSettings

router = APIRouter(tags=['settings'])


@router.post('/settings', response_model=HomeSettings)
def create_settings(data: HomeSettings, db: Session = Depends(get_db)):
    return options.save_home_settings(db, data)


@router.get('/settings', response_model=HomeSettings)
def get_settings(db: Session = Depends(get_db)):
    return options.load_home_settings(db)
