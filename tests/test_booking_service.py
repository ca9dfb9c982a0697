import pytest
from bson import ObjectId

from hotel_booking_api.app.core.exceptions import Forbidden, InvalidArgument, NotFound, StoreFailure
from hotel_booking_api.app.schemas.booking import BookingCreate, BookingOwnerClaim, BookingUpdate

from .helpers import ALICE, BOB, add_booking, add_review, add_room, identity


def _create(services, room_id, email=ALICE, as_user=ALICE, date="2024-01-01"):
    data = BookingCreate(roomId=str(room_id), userEmail=email, bookingDate=date)
    return services.bookings.create_booking(identity(as_user), data)


def test_create_booking_stores_payload(store, services):
    room = add_room(store, "Suite", 300)

    booking = _create(services, room)

    stored = store.bookings.find_one({"_id": booking["_id"]})
    assert stored == {"_id": booking["_id"], "roomId": str(room), "userEmail": ALICE, "bookingDate": "2024-01-01"}


def test_create_booking_for_someone_else_writes_nothing(store, services):
    room = add_room(store, "Suite", 300)

    with pytest.raises(Forbidden):
        _create(services, room, email=ALICE, as_user=BOB)

    assert store.bookings.documents == []
    assert "insert_one" not in store.bookings.calls


def test_create_booking_does_not_check_room_or_overlaps(store, services):
    _create(services, "R1")
    _create(services, "R1")
    assert len(store.bookings.documents) == 2


def test_list_bookings_joins_room_details(store, services):
    room = add_room(store, "Suite", 300)
    booking = _create(services, room)
    add_booking(store, room, BOB)

    (listed,) = services.bookings.list_bookings_for_owner(identity(ALICE), ALICE)

    assert listed["_id"] == booking["_id"]
    assert [r["name"] for r in listed["roomDetails"]] == ["Suite"]


def test_list_bookings_with_dangling_room_reference(store, services):
    _create(services, "not-an-object-id")
    _create(services, str(ObjectId()))

    listed = services.bookings.list_bookings_for_owner(identity(ALICE), ALICE)

    assert [b["roomDetails"] for b in listed] == [[], []]


def test_list_bookings_of_another_guest_is_forbidden(store, services):
    add_booking(store, ObjectId(), ALICE)
    with pytest.raises(Forbidden):
        services.bookings.list_bookings_for_owner(identity(BOB), ALICE)
    assert store.bookings.calls == ["insert_one"]


def test_update_changes_only_booking_date(store, services):
    room = add_room(store, "Suite", 300)
    booking_id = add_booking(store, room, ALICE, reviewed=True, guests=2)

    services.bookings.update_booking(
        identity(ALICE), str(booking_id), BookingUpdate(userEmail=ALICE, bookingDate="2024-03-15")
    )

    assert store.bookings.find_one({"_id": booking_id}) == {
        "_id": booking_id,
        "roomId": str(room),
        "userEmail": ALICE,
        "bookingDate": "2024-03-15",
        "reviewed": True,
        "guests": 2,
    }


def test_update_with_same_date_succeeds(store, services):
    booking_id = add_booking(store, ObjectId(), ALICE)
    services.bookings.update_booking(
        identity(ALICE), str(booking_id), BookingUpdate(userEmail=ALICE, bookingDate="2024-01-01")
    )


def test_update_rejects_malformed_id(services):
    with pytest.raises(InvalidArgument, match="Invalid booking ID"):
        services.bookings.update_booking(identity(ALICE), "123", BookingUpdate(userEmail=ALICE, bookingDate="2024-01-02"))


def test_update_checks_claim_before_id(store, services):
    with pytest.raises(Forbidden):
        services.bookings.update_booking(identity(BOB), "123", BookingUpdate(userEmail=ALICE, bookingDate="2024-01-02"))


def test_update_missing_booking(services):
    with pytest.raises(NotFound):
        services.bookings.update_booking(
            identity(ALICE), str(ObjectId()), BookingUpdate(userEmail=ALICE, bookingDate="2024-01-02")
        )


def test_update_of_someone_elses_booking_is_forbidden(store, services):
    booking_id = add_booking(store, ObjectId(), ALICE)

    with pytest.raises(Forbidden):
        services.bookings.update_booking(identity(BOB), str(booking_id), BookingUpdate(userEmail=BOB, bookingDate="2030-01-01"))

    assert store.bookings.find_one({"_id": booking_id})["bookingDate"] == "2024-01-01"
    assert "update_one" not in store.bookings.calls


def test_delete_twice_yields_not_found(store, services):
    booking_id = add_booking(store, ObjectId(), ALICE)

    services.bookings.delete_booking(identity(ALICE), str(booking_id), BookingOwnerClaim(userEmail=ALICE))
    with pytest.raises(NotFound):
        services.bookings.delete_booking(identity(ALICE), str(booking_id), BookingOwnerClaim(userEmail=ALICE))

    assert store.bookings.documents == []


def test_delete_by_another_identity_keeps_booking(store, services):
    booking_id = add_booking(store, ObjectId(), ALICE)

    with pytest.raises(Forbidden):
        services.bookings.delete_booking(identity(BOB), str(booking_id), BookingOwnerClaim(userEmail=BOB))
    with pytest.raises(Forbidden):
        services.bookings.delete_booking(identity(BOB), str(booking_id), BookingOwnerClaim(userEmail=ALICE))

    assert store.bookings.find_one({"_id": booking_id}) is not None
    assert "delete_one" not in store.bookings.calls


def test_delete_store_failure(store, services):
    booking_id = add_booking(store, ObjectId(), ALICE)
    store.bookings.fail_on.add("delete_one")

    with pytest.raises(StoreFailure, match="Failed to cancel the booking"):
        services.bookings.delete_booking(identity(ALICE), str(booking_id), BookingOwnerClaim(userEmail=ALICE))


def test_sync_reviewed_flags_sets_missing_flags_only(store, services):
    room = add_room(store, "Suite", 300)
    reviewed = add_booking(store, room, ALICE)
    already = add_booking(store, room, ALICE, reviewed=True)
    untouched = add_booking(store, room, ALICE)
    add_review(store, room, 5, bookingId=str(reviewed))
    add_review(store, room, 4, bookingId=str(already))
    add_review(store, room, 3, bookingId="garbage")

    assert services.bookings.sync_reviewed_flags() == 1
    assert services.bookings.sync_reviewed_flags() == 0

    flags = {doc["_id"]: doc.get("reviewed") for doc in store.bookings.documents}
    assert flags == {reviewed: True, already: True, untouched: None}


def test_sync_reviewed_flags_never_clears(store, services):
    booking_id = add_booking(store, ObjectId(), ALICE, reviewed=True)

    assert services.bookings.sync_reviewed_flags() == 0
    assert store.bookings.find_one({"_id": booking_id})["reviewed"] is True


def test_sync_reviewed_flags_limited_to_reviewed_bookings(store, services):
    room = add_room(store, "Suite", 300)
    with_review = add_booking(store, room, ALICE)
    without_review = add_booking(store, room, ALICE)
    add_review(store, room, 5, bookingId=str(with_review))

    changed = services.bookings.sync_reviewed_flags([str(with_review), str(without_review)])

    assert changed == 1
    assert store.bookings.find_one({"_id": without_review}).get("reviewed") is None


def test_sync_reviewed_flags_ignores_reviews_by_other_guests(store, services):
    room = add_room(store, "Suite", 300)
    bobs_booking = add_booking(store, room, BOB)
    add_review(store, room, 5, bookingId=str(bobs_booking), userEmail=ALICE)

    assert services.bookings.sync_reviewed_flags() == 0
    assert services.bookings.sync_reviewed_flags([str(bobs_booking)]) == 0
    assert "reviewed" not in store.bookings.find_one({"_id": bobs_booking})

    add_review(store, room, 4, bookingId=str(bobs_booking), userEmail=BOB)

    assert services.bookings.sync_reviewed_flags() == 1
    assert store.bookings.find_one({"_id": bobs_booking})["reviewed"] is True
