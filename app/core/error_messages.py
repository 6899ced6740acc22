# app/core/error_messages.py
from fastapi import HTTPException, status


class ErrorResponses:
    INVALID_CREDENTIALS = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password"
    )
    INVALID_TOKEN = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authorized, token failed",
        headers={"WWW-Authenticate": "Bearer"},
    )
    ADMIN_EXISTS = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Admin already exists"
    )
    REGISTRATION_CLOSED = HTTPException(
        status_code=status.HTTP_403_FORBIDDEN, detail="Admin registration is disabled"
    )
    BOOKING_NOT_FOUND = HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found"
    )
    SERVICE_NOT_FOUND = HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Service not found"
    )
    SLOT_TAKEN = HTTPException(
        status_code=status.HTTP_409_CONFLICT, detail="This time slot is already booked"
    )
    TOTAL_MISMATCH = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Total price does not match current service prices",
    )
    NO_IMAGE = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="No image file provided"
    )
    NOT_AN_IMAGE = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed!"
    )
    IMAGE_TOO_LARGE = HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Image exceeds upload limit"
    )
    UPLOAD_FAILED = HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error uploading image"
    )
