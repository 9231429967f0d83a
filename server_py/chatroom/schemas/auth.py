from pydantic import BaseModel, EmailStr, Field, field_validator

# Signup payload
class SignUpRequest(BaseModel):
    username: str = Field(min_length=3, max_length=20)
    email: EmailStr
    password: str = Field(min_length=6)
    first_name: str = Field(alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(alias="lastName", min_length=1, max_length=50)

    model_config = {"populate_by_name": True}

    # Stripped before the length limits apply
    @field_validator("username", "first_name", "last_name", mode="before")
    @classmethod
    def strip_value(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

# Signin payload
class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
