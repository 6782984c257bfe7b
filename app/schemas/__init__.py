from app.schemas.common import CamelModel, MessageResponse
from app.schemas.auth import AuthContext, AuthResponse, UserCreate, UserLogin, UserResponse
from app.schemas.listing import ListingCreate, ListingQuery, ListingResponse, ListingUpdate
from app.schemas.reservation import CancelReservationResponse, ReservationCreate, ReservationResponse
