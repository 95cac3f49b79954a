"""
Functional tests for DevCommunity CRUD operations
Run: pytest test_crud.py
"""

from app.config import settings
from app.crud import crud_article, crud_comment, crud_follow, crud_like, crud_tag, crud_user
from app.schemas import ArticleCreate, ArticleFilters, ArticleUpdate, CommentCreate, UserUpdate


def _article(store, author_id, **overrides):
    data = {
        "title": "Getting Started with React 18",
        "content": "Automatic batching and transitions.",
        "author_id": author_id,
        "published": True,
    }
    data.update(overrides)
    return crud_article.create_article(store, article_in=ArticleCreate(**data))


# ----- Users -----

def test_user_lookup_by_email_and_username(store, make_user):
    user = make_user("mike_codes", email="mike@example.com")

    by_email = crud_user.get_by_email(store, "mike@example.com")
    by_username = crud_user.get_by_username(store, "mike_codes")

    assert by_email == user
    assert by_username == user
    assert by_email.id == user.id
    assert by_email.password


def test_user_password_is_hashed(store, make_user):
    user = make_user(password="secret123")
    assert user.password != "secret123"
    assert crud_user.authenticate(store, email=user.email, password="secret123") == user
    assert crud_user.authenticate(store, email=user.email, password="wrong-password") is None
    assert crud_user.authenticate(store, email="nobody@example.com", password="secret123") is None


def test_user_empty_profile_fields_stored_as_null(store, make_user):
    user = make_user(bio="", website="")
    assert user.bio is None
    assert user.website is None


def test_user_missing_lookups(store):
    assert crud_user.get(store, "missing") is None
    assert crud_user.get_by_email(store, "") is None
    assert crud_user.update(store, id="missing", obj_in={"bio": "x"}) is None


def test_user_update_merges_and_rehashes(store, make_user):
    user = make_user()
    updated = crud_user.update(store, id=user.id, obj_in=UserUpdate(bio="New bio", password="changed1"))

    assert updated.bio == "New bio"
    assert updated.username == user.username
    assert updated.created_at == user.created_at
    assert crud_user.authenticate(store, email=user.email, password="changed1") is not None


# ----- Articles -----

def test_create_article_defaults(store, author):
    article = crud_article.create_article(
        store,
        article_in=ArticleCreate(title="Draft", content="Body", author_id=author.id),
    )
    assert article.published is False
    assert article.likes == 0
    assert article.views == 0
    assert article.tags is None
    assert article.created_at == article.updated_at


def test_get_article_with_author(store, author):
    article = _article(store, author.id)
    crud_comment.create_comment(
        store, comment_in=CommentCreate(content="Nice!", article_id=article.id, author_id=author.id)
    )

    found = crud_article.get_with_author(store, article.id)
    assert found.id == article.id
    assert found.author.id == author.id
    assert found.comments_count == 1
    assert not hasattr(found.author, "password")


def test_published_filter_never_returns_drafts(store, author):
    _article(store, author.id, title="Published")
    _article(store, author.id, title="Draft", published=False)

    published = crud_article.get_articles(store, ArticleFilters(published=True))
    drafts = crud_article.get_articles(store, ArticleFilters(published=False))
    everything = crud_article.get_articles(store)

    assert [a.title for a in published] == ["Published"]
    assert [a.title for a in drafts] == ["Draft"]
    assert len(everything) == 2


def test_tag_filter_is_exact_membership(store, author):
    _article(store, author.id, title="React one", tags=["react", "javascript"])
    _article(store, author.id, title="Python one", tags=["python"])
    _article(store, author.id, title="Shouting", tags=["React"])
    _article(store, author.id, title="Untagged")

    results = crud_article.get_articles(store, ArticleFilters(tag="react"))
    assert [a.title for a in results] == ["React one"]
    assert all("react" in a.tags for a in results)


def test_search_is_case_insensitive_over_title_and_content(store, author):
    _article(store, author.id, title="Modern CSS Techniques", content="Grid and flexbox")
    _article(store, author.id, title="Microservices", content="Docker and FLEXBOX free")
    _article(store, author.id, title="Unrelated", content="Nothing here")

    results = crud_article.get_articles(store, ArticleFilters(search="FlexBox"))
    assert sorted(a.title for a in results) == ["Microservices", "Modern CSS Techniques"]


def test_author_filter(store, author, make_user):
    other = make_user("alex_frontend")
    _article(store, author.id, title="Mine")
    _article(store, other.id, title="Theirs")

    results = crud_article.get_articles(store, ArticleFilters(author_id=other.id))
    assert [a.title for a in results] == ["Theirs"]


def test_articles_newest_first(store, author):
    for i in range(4):
        _article(store, author.id, title=f"Article {i}")

    results = crud_article.get_articles(store)
    created = [a.created_at for a in results]
    assert created == sorted(created, reverse=True)


def test_orphaned_articles_are_dropped(store, author):
    article = _article(store, author.id)
    _article(store, "ghost-user", title="Orphan")

    results = crud_article.get_articles(store)
    assert [a.id for a in results] == [article.id]

    orphan = crud_article.filter_by(store, author_id="ghost-user")[0]
    assert crud_article.get(store, orphan.id) is not None
    assert crud_article.get_with_author(store, orphan.id) is None


def test_create_article_updates_known_tag_counters_only(store, author, tags):
    _article(store, author.id, tags=["javascript", "made-up-tag"])

    assert crud_tag.get_by_name(store, "javascript").articles_count == 1
    assert crud_tag.get_by_name(store, "react").articles_count == 0
    assert crud_tag.get_by_name(store, "made-up-tag") is None
    assert len(crud_tag.get_all(store)) == len(tags)


def test_create_article_can_register_unknown_tags(store, author, tags):
    crud_article.create_article(
        store,
        article_in=ArticleCreate(title="T", content="C", author_id=author.id, tags=["rust", "react"]),
        auto_create_tags=True,
    )
    assert crud_tag.get_by_name(store, "rust").articles_count == 1
    assert crud_tag.get_by_name(store, "react").articles_count == 1


def test_update_article(store, author):
    article = _article(store, author.id)
    updated = crud_article.update_article(
        store, id=article.id, obj_in=ArticleUpdate(title="Renamed", published=False)
    )

    assert updated.title == "Renamed"
    assert updated.published is False
    assert updated.content == article.content
    assert updated.author_id == author.id
    assert updated.created_at == article.created_at
    assert updated.updated_at >= article.updated_at


def test_update_article_ignores_immutable_fields(store, author):
    article = _article(store, author.id)
    updated = crud_article.update_article(store, id=article.id, obj_in={"author_id": "someone-else", "id": "new-id"})
    assert updated.id == article.id
    assert updated.author_id == author.id
    assert crud_article.update_article(store, id="missing", obj_in={"title": "x"}) is None


def test_delete_article(store, author, tags):
    article = _article(store, author.id, tags=["react"])

    assert crud_article.delete_article(store, id=article.id) is True
    assert crud_article.get_with_author(store, article.id) is None
    assert crud_article.delete_article(store, id=article.id) is False
    # Counters are not decremented on delete
    assert crud_tag.get_by_name(store, "react").articles_count == 1


def test_record_view(store, author):
    article = _article(store, author.id)
    crud_article.record_view(store, id=article.id)
    crud_article.record_view(store, id=article.id)

    assert crud_article.get(store, article.id).views == 2
    assert crud_article.record_view(store, id="missing") is None


# ----- Comments -----

def test_comments_for_article_oldest_first(store, author, make_user):
    reader = make_user("reader")
    article = _article(store, author.id)
    other = _article(store, author.id, title="Other")

    first = crud_comment.create_comment(
        store, comment_in=CommentCreate(content="First", article_id=article.id, author_id=reader.id)
    )
    second = crud_comment.create_comment(
        store, comment_in=CommentCreate(content="Second", article_id=article.id, author_id=author.id, parent_id=first.id)
    )
    crud_comment.create_comment(
        store, comment_in=CommentCreate(content="Elsewhere", article_id=other.id, author_id=reader.id)
    )
    crud_comment.create_comment(
        store, comment_in=CommentCreate(content="Ghost", article_id=article.id, author_id="ghost-user")
    )

    comments = crud_comment.get_by_article(store, article_id=article.id)
    assert [c.id for c in comments] == [first.id, second.id]
    assert comments[0].author.username == "reader"
    assert comments[1].parent_id == first.id


def test_delete_comment(store, author):
    article = _article(store, author.id)
    comment = crud_comment.create_comment(
        store, comment_in=CommentCreate(content="Bye", article_id=article.id, author_id=author.id)
    )
    assert crud_comment.delete_comment(store, id=comment.id) is True
    assert crud_comment.delete_comment(store, id=comment.id) is False
    assert crud_article.get_with_author(store, article.id).comments_count == 0


# ----- Likes -----

def test_toggle_like_once_and_twice(store, author, make_user):
    reader = make_user("reader")
    article = _article(store, author.id)

    first = crud_like.toggle_like(store, user_id=reader.id, article_id=article.id)
    assert first.liked is True
    assert first.likes_count == 1
    assert crud_article.get(store, article.id).likes == 1
    assert crud_like.get_user_likes(store, user_id=reader.id) == [article.id]

    second = crud_like.toggle_like(store, user_id=reader.id, article_id=article.id)
    assert second.liked is False
    assert second.likes_count == 0
    assert crud_article.get(store, article.id).likes == 0
    assert crud_like.get_user_likes(store, user_id=reader.id) == []


def test_like_counter_floors_at_zero(store, author, make_user):
    reader = make_user("reader")
    article = _article(store, author.id)
    crud_like.toggle_like(store, user_id=reader.id, article_id=article.id)
    crud_article.update(store, id=article.id, obj_in={"likes": 0})

    result = crud_like.toggle_like(store, user_id=reader.id, article_id=article.id)
    assert result.liked is False
    assert result.likes_count == 0


def test_like_on_missing_article(store, make_user):
    reader = make_user("reader")
    result = crud_like.toggle_like(store, user_id=reader.id, article_id="missing")
    assert result.liked is True
    assert result.likes_count == 0


def test_is_liked_annotation(store, author, make_user):
    reader = make_user("reader")
    article = _article(store, author.id)
    crud_like.toggle_like(store, user_id=reader.id, article_id=article.id)

    assert crud_like.check_user_liked(store, user_id=reader.id, article_id=article.id)
    assert crud_article.get_with_author(store, article.id, current_user_id=reader.id).is_liked is True
    assert crud_article.get_with_author(store, article.id, current_user_id=author.id).is_liked is False
    assert crud_article.get_with_author(store, article.id).is_liked is None


# ----- Follows -----

def test_toggle_follow(store, make_user):
    x = make_user("followed")
    y = make_user("follower")

    assert crud_follow.toggle_follow(store, follower_id=y.id, following_id=x.id).following is True
    followers = crud_follow.get_followers(store, user_id=x.id)
    assert [u.id for u in followers] == [y.id]
    assert [u.id for u in crud_follow.get_following(store, user_id=y.id)] == [x.id]
    assert crud_follow.is_following(store, follower_id=y.id, following_id=x.id)

    assert crud_follow.toggle_follow(store, follower_id=y.id, following_id=x.id).following is False
    assert crud_follow.get_followers(store, user_id=x.id) == []
    assert not crud_follow.is_following(store, follower_id=y.id, following_id=x.id)


def test_followers_drop_missing_users(store, make_user):
    x = make_user("followed")
    crud_follow.toggle_follow(store, follower_id="ghost-user", following_id=x.id)
    assert crud_follow.get_followers(store, user_id=x.id) == []


# ----- Tags -----

def test_tags_sorted_by_name(store, tags):
    assert [t.name for t in crud_tag.get_all(store)] == ["javascript", "python", "react"]


def test_popular_tags(store, author, tags):
    _article(store, author.id, tags=["python"])
    _article(store, author.id, tags=["python", "react"])

    popular = crud_tag.get_popular(store, limit=2)
    assert [t.name for t in popular] == ["python", "react"]
    assert popular[0].articles_count == 2


def test_popular_tags_default_limit_comes_from_settings(store, tags, monkeypatch):
    monkeypatch.setattr(settings, "POPULAR_TAGS_LIMIT", 2)
    assert len(crud_tag.get_popular(store)) == 2


def test_create_tag_is_idempotent(store):
    first = crud_tag.create_tag(store, name="rust")
    again = crud_tag.create_tag(store, name="rust", color="#000000")

    assert again.id == first.id
    assert first.color == "#3b82f6"
    assert first.articles_count == 0
    assert first.description == ""
    assert len(crud_tag.get_all(store)) == 1
