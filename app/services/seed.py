"""Sample data written once to pre-populate an empty store."""

import logging
from typing import List, Optional

from app.config import settings
from app.core.storage import LocalStore, StorageKeys
from app.crud import crud_article, crud_tag, crud_user
from app.schemas.article import ArticleCreate
from app.schemas.user import UserCreate

logger = logging.getLogger(__name__)


DEFAULT_TAGS = [
    {"name": "javascript", "color": "#f7df1e"},
    {"name": "react", "color": "#61dafb"},
    {"name": "webdev", "color": "#3b82f6"},
    {"name": "python", "color": "#3776ab"},
    {"name": "devops", "color": "#326ce5"},
    {"name": "ai", "color": "#ff6b6b"},
    {"name": "programming", "color": "#8b5cf6"},
    {"name": "opensource", "color": "#22c55e"},
]

SAMPLE_USERS = [
    {
        "username": "sarah_dev",
        "email": "sarah@example.com",
        "bio": "Full-stack developer passionate about React and Node.js",
        "location": "San Francisco, CA",
        "website": "https://sarahdev.com",
    },
    {
        "username": "mike_codes",
        "email": "mike@example.com",
        "bio": "Backend engineer specializing in microservices and DevOps",
        "location": "New York, NY",
        "website": "",
    },
    {
        "username": "alex_frontend",
        "email": "alex@example.com",
        "bio": "Frontend specialist with expertise in modern JavaScript frameworks",
        "location": "Seattle, WA",
        "website": "https://alexfrontend.dev",
    },
]

# author_index points into SAMPLE_USERS
SAMPLE_ARTICLES = [
    {
        "author_index": 0,
        "title": "Getting Started with React 18: A Complete Guide",
        "excerpt": "Explore the exciting new features in React 18 including automatic batching, concurrent features, and improved Suspense.",
        "tags": ["react", "javascript", "webdev"],
        "content": """React 18 introduces several exciting features that enhance the developer experience and application performance. In this guide we explore automatic batching, transitions, and Suspense improvements.

## Automatic Batching

React 18 batches multiple state updates into a single re-render, including updates inside promises, timeouts, and native event handlers.

```javascript
function handleClick() {
  setCount(c => c + 1); // Does not re-render yet
  setFlag(f => !f); // Does not re-render yet
  // React will only re-render once at the end
}
```

## Concurrent Features

React can now interrupt rendering work to handle high-priority updates:
- Transitions for non-urgent updates
- Suspense improvements for better loading states
- New hooks like useDeferredValue and useTransition""",
    },
    {
        "author_index": 1,
        "title": "Building Scalable Microservices with Node.js",
        "excerpt": "Learn how to build scalable microservices architecture using Node.js with best practices and real-world examples.",
        "tags": ["nodejs", "microservices", "devops", "programming"],
        "content": """Microservices architecture has become increasingly popular for building scalable applications. Each service is responsible for a specific business function and can be deployed independently.

## Key Benefits

1. **Scalability**: Scale individual services based on demand
2. **Technology Diversity**: Use different technologies for different services
3. **Fault Isolation**: Failure in one service doesn't bring down the entire system
4. **Team Independence**: Different teams can work on different services

## Best Practices

- Use API gateways for external communication
- Implement proper logging and monitoring
- Use containerization (Docker) for deployment
- Use message queues for async communication""",
    },
    {
        "author_index": 2,
        "title": "Modern CSS Techniques for Better Web Design",
        "excerpt": "Discover modern CSS techniques including Grid, Flexbox, custom properties, and container queries for better web design.",
        "tags": ["css", "webdev", "frontend"],
        "content": """CSS has evolved significantly in recent years. Modern CSS lets us build responsive designs with less code and better maintainability.

## CSS Grid vs Flexbox

Use Flexbox for one-dimensional layouts and component-level design. Use Grid for two-dimensional, page-level layouts.

```css
.grid-container {
  display: grid;
  grid-template-columns: 1fr 3fr 1fr;
  grid-gap: 20px;
}
```

## Container Queries

Container queries style elements based on their container's size rather than the viewport.""",
    },
]


def is_seeded(store: LocalStore) -> bool:
    return bool(store.get_item(StorageKeys.INITIALIZED))


def seed_sample_data(store: LocalStore, *, demo_password: Optional[str] = None) -> bool:
    """Write default tags, sample users and sample articles once.

    Returns False when the store was already initialized.
    """
    if is_seeded(store):
        logger.debug("[SEED] Store already initialized, skipping.")
        return False

    demo_password = demo_password or settings.DEMO_PASSWORD

    with store.transaction():
        for tag in DEFAULT_TAGS:
            crud_tag.create_tag(store, name=tag["name"], color=tag["color"])

        user_ids: List[str] = []
        for user_data in SAMPLE_USERS:
            user = crud_user.create_user(store, user_in=UserCreate(password=demo_password, **user_data))
            user_ids.append(user.id)

        for article_data in SAMPLE_ARTICLES:
            crud_article.create_article(
                store,
                article_in=ArticleCreate(
                    title=article_data["title"],
                    content=article_data["content"],
                    excerpt=article_data["excerpt"],
                    tags=article_data["tags"],
                    author_id=user_ids[article_data["author_index"]],
                    published=True,
                    cover_image="",
                ),
                auto_create_tags=False,
            )

        store.set_item(StorageKeys.INITIALIZED, "true")

    logger.info(
        f"[SEED] Sample data written: {len(DEFAULT_TAGS)} tags, "
        f"{len(SAMPLE_USERS)} users, {len(SAMPLE_ARTICLES)} articles"
    )
    return True
