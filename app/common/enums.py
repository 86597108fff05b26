"""Shared enumerations: table names, cookie keys, auth methods and messages."""

from enum import Enum


class EntityName(str, Enum):
    Otp = "otp"
    User = "user"
    Post = "post"
    Media = "media"
    Album = "album"
    Story = "story"
    Follow = "follow"
    Profile = "profile"
    Hashtag = "hashtag"
    PostLike = "post_like"
    PostComment = "post_comment"
    PostBookmark = "post_bookmarks"
    PostCommentLike = "post_comment_like"


class CookieKeys(str, Enum):
    OTP = "otp"


class AuthMethod(str, Enum):
    """Column a login identifier is matched against."""

    Email = "email"
    Phone = "phone"
    Username = "username"


class RegisterMethod(str, Enum):
    """Contact channels accepted at registration."""

    Email = "email"
    Phone = "phone"


class PostStatus(str, Enum):
    Published = "published"
    Draft = "draft"


class AuthMessage(str, Enum):
    NotFoundAccount = "account not found"
    AlreadyExistAccount = "an account with this email or phone already exists"
    AlreadyExistUsername = "this username is already taken"
    ExpiredCode = "the code has expired, request a new one"
    TryAgain = "the code is incorrect, try again"
    LoginAgain = "login to your account again"
    LoginIsRequired = "login to your account"


class BadRequestMessage(str, Enum):
    InValidLoginData = "login data is not valid"
    InValidRegisterData = "register data is not valid"


class PublicMessage(str, Enum):
    SentOtp = "one-time code sent successfully"
    LoggedIn = "logged in successfully"
    Created = "created successfully"
    Updated = "updated successfully"
    Deleted = "deleted successfully"


class NotFoundMessage(str, Enum):
    NotFoundPost = "post not found"
    NotFoundUser = "user not found"
