from pydantic import BaseModel, ConfigDict


class BaseBookingModel(BaseModel):
    """Shared configuration: assignments are re-validated."""
    model_config = ConfigDict(validate_assignment=True)
