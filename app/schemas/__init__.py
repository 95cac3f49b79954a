from .base import StoredRecord
from .user import (
	PublicUser,
	User,
	UserCreate,
	UserUpdate,
	LoginRequest,
	RegisterForm,
)
from .article import (
	Article,
	ArticleCreate,
	ArticleUpdate,
	ArticleFilters,
	ArticleWithAuthor,
)
from .comment import (
	Comment,
	CommentCreate,
	CommentWithAuthor,
)
from .like import (
	Like,
	LikeToggleResult,
)
from .follow import (
	Follow,
	FollowToggleResult,
)
from .tag import (
	Tag,
	DEFAULT_TAG_COLOR,
)

__all__ = [
	# Base
	"StoredRecord",
	# User
	"PublicUser",
	"User",
	"UserCreate",
	"UserUpdate",
	"LoginRequest",
	"RegisterForm",
	# Article
	"Article",
	"ArticleCreate",
	"ArticleUpdate",
	"ArticleFilters",
	"ArticleWithAuthor",
	# Comment
	"Comment",
	"CommentCreate",
	"CommentWithAuthor",
	# Like
	"Like",
	"LikeToggleResult",
	# Follow
	"Follow",
	"FollowToggleResult",
	# Tag
	"Tag",
	"DEFAULT_TAG_COLOR",
]
