import pytest
from conftest import SAM

from aura_companion.conversation_database import InMemoryCommentDatabase, Post
from aura_companion.errors import NoActiveUserError, StoreError, ValidationError
from aura_companion.feed import FeedSession
from aura_companion.identity import StaticIdentityProvider


class FailingCommentDatabase(InMemoryCommentDatabase):
    async def get_comments_by_post_ids(self, post_ids):
        raise StoreError("comment backend unavailable")


@pytest.fixture
async def seeded_posts(post_db):
    for post_id, timestamp, hearts in [("older", 1000, 3), ("newer", 2000, 0)]:
        await post_db.create_post(
            Post(
                id=post_id,
                content="Trying to take it one day at a time",
                emotions=["hopeful"],
                hearts=hearts,
                user_name="Robin",
                create_timestamp=timestamp,
                update_timestamp=timestamp,
            )
        )
    return post_db


@pytest.fixture
async def feed(seeded_posts, comment_db, settings):
    session = FeedSession(seeded_posts, comment_db, StaticIdentityProvider(SAM), settings)
    await session.fetch_posts()
    return session


async def test_fetch_posts_newest_first(feed):
    assert [p.id for p in feed.posts] == ["newer", "older"]
    assert all(not p.has_hearted for p in feed.posts)
    assert feed.loading is False


async def test_toggle_heart_round_trip(feed, post_db):
    hearted = await feed.toggle_heart("older")
    assert hearted.has_hearted is True
    assert hearted.hearts == 4
    assert (await post_db.get_post_by_id("older")).hearts == 4

    unhearted = await feed.toggle_heart("older")
    assert unhearted.has_hearted is False
    assert unhearted.hearts == 3
    assert (await post_db.get_post_by_id("older")).hearts == 3


async def test_failed_heart_is_reverted(feed, post_db):
    post_db.fail_on_update = True

    assert await feed.toggle_heart("older") is None

    post = feed.posts[1]
    assert (post.has_hearted, post.hearts) == (False, 3)
    assert feed.error == "post backend unavailable"


async def test_has_hearted_resets_on_fetch(feed):
    await feed.toggle_heart("newer")

    await feed.fetch_posts()

    post = feed.posts[0]
    assert post.hearts == 1
    assert post.has_hearted is False


async def test_toggle_heart_on_unknown_post(feed):
    assert await feed.toggle_heart("missing") is None


async def test_add_comment_updates_the_counter(feed, post_db, comment_db):
    comment = await feed.add_comment("newer", "  You've got this  ")

    assert comment.content == "You've got this"
    assert comment.user_name == "Sam"
    assert feed.posts[0].comments == 1
    assert feed.posts[0].comments_data == [comment]
    assert (await post_db.get_post_by_id("newer")).comments == 1
    assert await comment_db.get_comments_by_post_id("newer") == [comment]


async def test_add_comment_requires_a_user(seeded_posts, comment_db, settings):
    anonymous = FeedSession(seeded_posts, comment_db, StaticIdentityProvider(), settings)
    await anonymous.fetch_posts()

    with pytest.raises(NoActiveUserError):
        await anonymous.add_comment("newer", "hello")


@pytest.mark.parametrize("content", ["", "   ", "x" * 501])
async def test_add_comment_validates_content(feed, content):
    with pytest.raises(ValidationError):
        await feed.add_comment("newer", content)


async def test_comment_fetch_failure_still_loads_posts(seeded_posts, settings):
    session = FeedSession(seeded_posts, FailingCommentDatabase(), StaticIdentityProvider(SAM), settings)

    posts = await session.fetch_posts()

    assert [p.id for p in posts] == ["newer", "older"]
    assert all(p.comments_data == [] for p in posts)
    assert session.error == "comment backend unavailable"


async def test_fetch_posts_groups_comments_by_post(feed):
    await feed.add_comment("older", "Sending strength")
    await feed.add_comment("newer", "Same here")

    posts = await feed.fetch_posts()

    assert [c.content for c in posts[0].comments_data] == ["Same here"]
    assert [c.content for c in posts[1].comments_data] == ["Sending strength"]


async def test_load_comments_for_post(feed):
    await feed.add_comment("older", "Sending strength")
    feed.posts[1].comments_data = []

    comments = await feed.load_comments_for_post("older")

    assert [c.content for c in comments] == ["Sending strength"]
    assert feed.posts[1].comments_data == comments


async def test_heart_locks_are_released(feed, post_db):
    await feed.toggle_heart("older")
    post_db.fail_on_update = True
    await feed.toggle_heart("newer")

    assert len(feed._heart_locks) == 0
