class PlacesError(Exception):
    """Base class for errors that are reported to the caller as a message and a status code."""

    status_code = 500
    message = "Something went wrong."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Client errors


class ValidationFailed(PlacesError):
    status_code = 422
    message = "Invalid input."


class InvalidImage(ValidationFailed):
    message = "Invalid image."


class NotFound(PlacesError):
    status_code = 404
    message = "Not found."


class PlaceNotFound(NotFound):
    message = "Could not find a place for the provided id."


class CreatorNotFound(NotFound):
    message = "Could not find a user with the provided id."


class NoPlacesFound(NotFound):
    message = "Could not find any place."


class NotAuthorized(PlacesError):
    status_code = 401
    message = "You are not allowed to modify this place."


# Upstream errors (geocoding, image storage); raised before anything is written


class UpstreamFailure(PlacesError):
    message = "An upstream service failed."


class AddressNotFound(UpstreamFailure):
    status_code = 422
    message = "Could not find location for the specified address."


class ServiceUnavailable(UpstreamFailure):
    message = "Could not reach the geocoding service, please try again."


class UploadFailed(UpstreamFailure):
    message = "Failed to upload image"

    def __init__(self, provider_message: str):
        # The provider message is for logs only
        super().__init__()
        self.provider_message = provider_message


class TransactionFailure(PlacesError):
    message = "Something went wrong, please try again."
