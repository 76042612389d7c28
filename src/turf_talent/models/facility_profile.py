"""FacilityProfile database model."""

from sqlalchemy import JSON, Column, DateTime, String, Text

from turf_talent.database import Base
from turf_talent.utils.timestamps import utc_now


class FacilityProfile(Base):
    """
    FacilityProfile model describing a golf course or sports facility.

    Job listings reference the facility that posts them, so a facility
    manager needs one of these before creating a job.

    Attributes:
        user_id: Primary key, the facility manager's identity
        name: Facility name
        facility_type: golf_course, sports_facility or other
        email: Contact email
        phone: Contact phone number
        address: Street, city, state, postal code and country
        website: Optional website URL
        description: Free-text description
        facilities: On-site facilities (e.g. driving range)
        amenities: Amenities offered to staff
        photos: Photo locators
        operating_hours: Opening and closing times per weekday
        created_at: Timestamp when record was created
        updated_at: Timestamp of the last change
    """

    __tablename__ = "facility_profiles"

    user_id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    facility_type = Column(String, nullable=False, default="golf_course")
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(JSON, default=dict, nullable=False)
    website = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    facilities = Column(JSON, default=list, nullable=False)
    amenities = Column(JSON, default=list, nullable=False)
    photos = Column(JSON, default=list, nullable=False)
    operating_hours = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)

    def __repr__(self) -> str:
        """String representation of FacilityProfile."""
        return f"<FacilityProfile(user_id='{self.user_id}', name='{self.name}')>"
