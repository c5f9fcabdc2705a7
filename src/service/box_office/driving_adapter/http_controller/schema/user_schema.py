from pydantic import BaseModel, SecretStr


class SignUpRequest(BaseModel):
    email: str
    password: SecretStr
    display_name: str = ''

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'asha@example.com',
                'password': 'P@ssw0rd',
                'display_name': 'Asha',
            }
        }


class LoginRequest(BaseModel):
    email: str
    password: SecretStr

    class Config:
        json_schema_extra = {'example': {'email': 'asha@example.com', 'password': 'P@ssw0rd'}}


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: str
    is_admin: bool


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse
