"""Tests for partial profile updates and avatar replacement."""

import pytest
from fastapi import HTTPException

from app.config import settings
from app.core.exceptions import MissingAccountId, UserNotFound
from app.modules.files.schemas import FileUpload
from app.modules.files.service import FileService
from app.modules.files.storage import SupabaseStorage
from app.modules.users.schemas import ProfileUpdate
from app.modules.users.service import UserService


@pytest.fixture
def service(supabase):
    file_service = FileService(supabase, storage=SupabaseStorage(supabase, "files"))
    return UserService(supabase, file_service=file_service)


def _stored_profile(supabase, account_id):
    return next(u for u in supabase.tables["user_profiles"] if u["account_id"] == account_id)


def _avatar(name="me.png"):
    return FileUpload(filename=name, content=b"\x89PNG-data", content_type="image/png")


def test_update_only_supplied_fields(supabase, service, user):
    updated = service.update_profile(user["account_id"], ProfileUpdate(location="X"))

    assert updated.location == "X"
    stored = _stored_profile(supabase, user["account_id"])
    assert stored["location"] == "X"
    assert stored["full_name"] == "Ada Lovelace"
    assert stored["city"] == "London"
    assert stored["avatar"] == settings.avatar_placeholder_url


def test_phone_number_coerced_to_int(supabase, service, user):
    updated = service.update_profile(user["account_id"], ProfileUpdate(phone_number="5551234"))

    assert updated.phone_number == 5551234
    assert _stored_profile(supabase, user["account_id"])["phone_number"] == 5551234


def test_update_sex_stored_as_value(supabase, service, user):
    service.update_profile(user["account_id"], ProfileUpdate(sex="female"))
    assert _stored_profile(supabase, user["account_id"])["sex"] == "female"


def test_invalid_sex_rejected():
    with pytest.raises(ValueError):
        ProfileUpdate(sex="other")


def test_missing_account_id(service):
    with pytest.raises(MissingAccountId):
        service.update_profile("", ProfileUpdate(city="Paris"))


def test_unknown_account(supabase, service):
    with pytest.raises(UserNotFound):
        service.update_profile("no-such-account", ProfileUpdate(city="Paris"), avatar=_avatar())
    assert supabase.storage_events() == []


def test_nothing_supplied_leaves_profile_untouched(supabase, service, user):
    updated = service.update_profile(user["account_id"], ProfileUpdate())

    assert updated.full_name == "Ada Lovelace"
    assert ("table.update", "user_profiles") not in supabase.events


def test_first_avatar_replaces_placeholder_without_delete(supabase, service, user):
    updated = service.update_profile(user["account_id"], ProfileUpdate(), avatar=_avatar())

    assert updated.avatar != settings.avatar_placeholder_url
    assert updated.avatar_file_id is not None
    assert updated.avatar_bucket_file_id is not None
    assert [e[0] for e in supabase.storage_events()] == ["storage.upload"]


def test_avatar_replace_uploads_then_deletes_old(supabase, service, user):
    old = supabase.seed_file(user, "old.png", 10, type_="image")
    for row in supabase.tables["user_profiles"]:
        row.update(avatar=old["url"], avatar_file_id=old["id"], avatar_bucket_file_id=old["bucket_file_id"])

    updated = service.update_profile(user["account_id"], ProfileUpdate(city="Paris"), avatar=_avatar("new.png"))

    events = supabase.storage_events()
    assert [e[0] for e in events] == ["storage.upload", "storage.remove"]
    assert events[1][1] == [old["bucket_file_id"]]
    assert updated.city == "Paris"
    assert updated.avatar_bucket_file_id == events[0][1]
    assert all(f["id"] != old["id"] for f in supabase.tables["files"])


def test_failed_avatar_upload_deletes_nothing(supabase, service, user):
    old = supabase.seed_file(user, "old.png", 10, type_="image")
    for row in supabase.tables["user_profiles"]:
        row.update(avatar=old["url"], avatar_file_id=old["id"], avatar_bucket_file_id=old["bucket_file_id"])
    supabase.fail_uploads = True

    with pytest.raises(HTTPException):
        service.update_profile(user["account_id"], ProfileUpdate(city="Paris"), avatar=_avatar())

    assert [e[0] for e in supabase.storage_events()] == ["storage.upload"]
    stored = _stored_profile(supabase, user["account_id"])
    assert stored["avatar_file_id"] == old["id"]
    assert stored["city"] == "London"


def test_old_avatar_without_ids_is_not_deleted(supabase, service, user):
    for row in supabase.tables["user_profiles"]:
        row.update(avatar="https://elsewhere.test/me.png")

    service.update_profile(user["account_id"], ProfileUpdate(), avatar=_avatar())

    assert [e[0] for e in supabase.storage_events()] == ["storage.upload"]


def test_failed_old_avatar_delete_still_updates(supabase, service, user):
    old = supabase.seed_file(user, "old.png", 10, type_="image")
    for row in supabase.tables["user_profiles"]:
        row.update(avatar=old["url"], avatar_file_id=old["id"], avatar_bucket_file_id=old["bucket_file_id"])
    supabase.fail_removes = True

    updated = service.update_profile(user["account_id"], ProfileUpdate(), avatar=_avatar())

    assert updated.avatar_file_id != old["id"]


def test_get_users_by_email_oldest_first(supabase, service):
    first = supabase.seed_user(email="dup@example.com", full_name="First")
    supabase.seed_user(email="dup@example.com", full_name="Second")

    users = service.get_users_by_email("dup@example.com")

    assert [u.full_name for u in users] == ["First", "Second"]
    assert users[0].id == first["id"]
