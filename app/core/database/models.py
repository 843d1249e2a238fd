import uuid
from typing import Any

from sqlalchemy import DateTime, Index, JSON, Text, Uuid, func
from sqlalchemy.orm import declarative_base, mapped_column

Base: Any = declarative_base()


# region Users
class UserRow(Base):
    __tablename__ = "user"

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    uid = mapped_column(Text, unique=True, nullable=False)  # Firebase id, maps to Firebase users
    name = mapped_column(Text, unique=True, nullable=False)
    email = mapped_column(Text, unique=True, nullable=False)
    # Never loaded into an entity; see InternalUser
    password_hash = mapped_column(Text, nullable=False)
    image_url = mapped_column(Text, nullable=True)
    image_blob_name = mapped_column(Text, nullable=True)

    # Ordered list of place ids (as strings) owned by this user. Kept in sync with PlaceRow.creator_id by the
    # place lifecycle workflows, there is no foreign key.
    places = mapped_column(JSON, nullable=False, default=list)

    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


# endregion Users


# region Places
class PlaceRow(Base):
    __tablename__ = "place"

    id = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title = mapped_column(Text, nullable=False)
    description = mapped_column(Text, nullable=False)

    # Canonical address and coordinates as reported by the geocoder (coordinates are kept as text)
    address = mapped_column(Text, nullable=False)
    latitude = mapped_column(Text, nullable=False)
    longitude = mapped_column(Text, nullable=False)

    image_url = mapped_column(Text, nullable=False)
    # Storage handle, only used to delete the image
    image_blob_name = mapped_column(Text, nullable=False)

    # Owning user, immutable after creation
    creator_id = mapped_column(Uuid, nullable=False)

    created_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (Index("idx_place_creator_id", creator_id),)


# endregion Places
