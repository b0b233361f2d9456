from .custom_user import CustomUser
