import pytest

from src.volunteer_duty.volunteer_duty.core.enums import RescueType
from src.volunteer_duty.volunteer_duty.core.exceptions import ValidationError
from src.volunteer_duty.volunteer_duty.rescues.service import RescueService


def test_create_rescue_stamps_server_time(container, users, rescues, now, at):
    user = users.add("Volunteer One")
    now.set(at(2024, 5, 15, 21, 5))

    record = container.rescue_service.create_rescue(
        user.user_id,
        {
            "caseType": "Trauma",
            "caseSubtype": "Fall",
            "rescueType": "BLS",
            "startTime": "20:40",
            "endTime": "21:00",
            "hospital": " City Hospital ",
        },
    )

    assert record.timestamp == at(2024, 5, 15, 21, 5)
    assert record.rescue_type == RescueType.BLS
    assert record.hospital == "City Hospital"
    assert len(rescues.records) == 1


@pytest.mark.parametrize(
    "fields",
    [
        {},
        {"caseType": "   "},
        {"caseType": "Medical", "rescueType": "XYZ"},
        {"caseType": "Medical", "startTime": "25:00"},
    ],
)
def test_invalid_submissions_are_rejected(fields):
    with pytest.raises(ValidationError):
        RescueService.parse_draft(fields)


def test_list_rescues_renders_civil_date_and_time(container, users, rescues, at):
    user = users.add("Volunteer One")
    rescues.add(user.user_id, at(2024, 5, 1, 0, 15), case_type="Medical")

    rows = container.rescue_service.list_rescues(user.user_id, year=2024, month=5)

    assert len(rows) == 1
    assert rows[0]["date"] == "2024-05-01"
    assert rows[0]["time"] == "00:15"
    assert rows[0]["caseType"] == "Medical"
    assert rows[0]["rescueType"] is None


def test_list_all_rescues_names_volunteers_and_hides_test_accounts(container, users, rescues, at):
    alice = users.add("Volunteer One")
    tester = users.add("Test Account", username="test", is_test_account=True)
    rescues.add(alice.user_id, at(2024, 5, 2, 10, 0))
    rescues.add(tester.user_id, at(2024, 5, 2, 11, 0))

    rows = container.rescue_service.list_all_rescues(year=2024, month=5)

    assert [(r["userId"], r["userName"]) for r in rows] == [(alice.user_id, "Volunteer One")]


def test_case_running_past_midnight_is_accepted():
    draft = RescueService.parse_draft({"caseType": "Medical", "startTime": "23:40", "endTime": "0:25"})

    assert (draft.start_time, draft.end_time) == ("23:40", "00:25")
