"""Tests for seeding, authentication and page statistics."""

from app.core.storage import StorageKeys
from app.crud import crud_article, crud_comment, crud_follow, crud_like, crud_tag, crud_user
from app.schemas import ArticleCreate, ArticleFilters, CommentCreate, UserCreate
from app.services import auth_service
from app.services.seed import DEFAULT_TAGS, SAMPLE_ARTICLES, SAMPLE_USERS, seed_sample_data
from app.services.stats import get_dashboard_stats, get_profile_stats


# ----- Seed -----

def test_seed_writes_sample_data_once(store):
    assert seed_sample_data(store, demo_password="password") is True
    assert store.get_item(StorageKeys.INITIALIZED) == "true"

    assert len(crud_tag.get_all(store)) == len(DEFAULT_TAGS)
    assert len(crud_user.get_multi(store)) == len(SAMPLE_USERS)
    assert len(crud_article.get_articles(store, ArticleFilters(published=True))) == len(SAMPLE_ARTICLES)

    assert seed_sample_data(store, demo_password="password") is False
    assert len(crud_user.get_multi(store)) == len(SAMPLE_USERS)


def test_seed_tag_counters(seeded_store):
    counts = {tag.name: tag.articles_count for tag in crud_tag.get_all(seeded_store)}
    assert counts["webdev"] == 2
    assert counts["react"] == 1
    assert counts["javascript"] == 1
    assert counts["devops"] == 1
    assert counts["python"] == 0
    # Tags outside the defaults are not registered
    assert "nodejs" not in counts
    assert "css" not in counts

    assert crud_tag.get_popular(seeded_store)[0].name == "webdev"


def test_seeded_users_can_log_in(seeded_store):
    user = auth_service.authenticate(seeded_store, email="sarah@example.com", password="password")
    assert user is not None
    assert user.username == "sarah_dev"
    assert user.website == "https://sarahdev.com"
    assert crud_user.get_by_username(seeded_store, "mike_codes").website is None


# ----- Auth service -----

def test_register_refuses_duplicate_email(store):
    user_in = UserCreate(username="dev", email="dev@example.com", password="secret123")
    assert auth_service.register(store, user_in=user_in) is not None
    assert auth_service.register(store, user_in=user_in) is None


def test_session_round_trip(store, author):
    auth_service.save_session_user(store, author)
    restored = auth_service.load_session_user(store)
    assert restored.id == author.id
    assert restored == author.to_public()

    auth_service.clear_session(store)
    assert auth_service.load_session_user(store) is None


# ----- Stats -----

def test_dashboard_stats_include_drafts(store, author, make_user):
    reader = make_user("reader")
    published = crud_article.create_article(
        store, article_in=ArticleCreate(title="Live", content="Body", author_id=author.id, published=True)
    )
    crud_article.create_article(store, article_in=ArticleCreate(title="Draft", content="Body", author_id=author.id))
    crud_article.record_view(store, id=published.id)
    crud_like.toggle_like(store, user_id=reader.id, article_id=published.id)
    crud_comment.create_comment(
        store, comment_in=CommentCreate(content="Nice", article_id=published.id, author_id=reader.id)
    )

    stats = get_dashboard_stats(store, user_id=author.id)
    assert stats.published_articles == 1
    assert stats.draft_articles == 1
    assert stats.total_views == 1
    assert stats.total_likes == 1
    assert stats.total_comments == 1


def test_profile_stats(store, author, make_user):
    reader = make_user("reader")
    crud_article.create_article(
        store, article_in=ArticleCreate(title="Live", content="Body", author_id=author.id, published=True)
    )
    crud_article.create_article(store, article_in=ArticleCreate(title="Draft", content="Body", author_id=author.id))
    crud_follow.toggle_follow(store, follower_id=reader.id, following_id=author.id)

    stats = get_profile_stats(store, user_id=author.id)
    assert stats.user.username == author.username
    assert stats.articles_count == 1
    assert stats.followers_count == 1
    assert stats.following_count == 0

    assert get_profile_stats(store, user_id="missing") is None
