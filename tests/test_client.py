import pytest

from app.client import ApiError, StillwaterClient
from app.schemas.auth import UserOut
from app.schemas.session import SessionWithTeacherOut


@pytest.fixture
def sw(client):
    return StillwaterClient(http=client)


def test_register_remembers_token(sw):
    result = sw.register("river@stillwater.io", "calm-breath", "River")
    assert sw.token == result.token
    assert isinstance(sw.user, UserOut)
    assert sw.me().id == result.user.id


def test_login_and_logout(sw):
    sw.register("river@stillwater.io", "calm-breath", "River")
    sw.token = None

    sw.login("river@stillwater.io", "calm-breath")
    assert sw.token is not None
    sw.logout()
    assert sw.token is None
    assert sw.user is None


def test_errors_carry_status_message_and_field(sw):
    with pytest.raises(ApiError) as excinfo:
        sw.login("river@stillwater.io", "wrong-pass")
    assert excinfo.value.status_code == 401

    with pytest.raises(ApiError) as excinfo:
        sw.create_session(
            {"title": "x", "description": "y", "category": "music", "duration": 5, "teacherId": 999}
        )
    assert excinfo.value.status_code == 400
    assert excinfo.value.field == "teacherId"


def test_invalid_body_is_rejected_before_sending(sw):
    with pytest.raises(ValueError):
        sw.register("river@stillwater.io", "short", "River")


def test_rehydrate_drops_rejected_token(sw):
    sw.token = "stale.token.value"
    assert sw.rehydrate() is None
    assert sw.token is None


def test_catalog_and_listener_flow(sw):
    sw.register("river@stillwater.io", "calm-breath", "River")
    teacher = sw.create_teacher({"name": "James Park", "bio": "Music-only focus sessions.", "specialty": "Music"})
    created = sw.create_session(
        {
            "title": "Rainforest Ambience",
            "description": "Tropical rain.",
            "category": "music",
            "duration": 30,
            "teacherId": teacher.id,
            "isFeatured": True,
        }
    )

    listed = sw.list_sessions(category="music", featured=True)
    assert [s.id for s in listed] == [created.id]
    assert isinstance(listed[0], SessionWithTeacherOut)
    assert listed[0].teacher.name == "James Park"

    assert sw.play(created.id).play_count == 1
    assert sw.daily().id == created.id
    assert [s.id for s in sw.popular()] == [created.id]

    assert sw.toggle_favorite(created.id) is True
    assert sw.is_favorite(created.id) is True
    assert [s.id for s in sw.favorites()] == [created.id]

    assert sw.record_progress(created.id, 30) is True
    stats = sw.stats()
    assert (stats.total_minutes, stats.current_streak, stats.sessions_completed) == (30, 1, 1)

    detail = sw.get_teacher(teacher.id)
    assert [s.id for s in detail.sessions] == [created.id]

    sw.delete_teacher(teacher.id)
    assert sw.get_session(created.id).teacher is None

    sw.delete_session(created.id)
    with pytest.raises(ApiError) as excinfo:
        sw.get_session(created.id)
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Session not found"

    usage = sw.usage()
    assert usage.user_count == 1
    assert usage.sessions == []
