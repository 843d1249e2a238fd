from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.core.database.unit_of_work import UnitOfWork
from app.core.firebase import FirebaseAdminProtocol, get_firebase_admin
from app.features.images.image_store import ImageStore
from app.features.places.geocoding import GeocodingClient
from app.features.places.place_store import PlaceStore
from app.features.users.user_store import UserStore


def get_place_store(db: AsyncSession = Depends(get_db)):
    return PlaceStore(db=db)


def get_user_store(db: AsyncSession = Depends(get_db)):
    return UserStore(db=db)


def get_unit_of_work(db: AsyncSession = Depends(get_db)):
    return UnitOfWork(db=db)


def get_image_store(firebase: FirebaseAdminProtocol = Depends(get_firebase_admin)):
    return ImageStore(firebase=firebase)


def get_geocoding_client():
    return GeocodingClient()
