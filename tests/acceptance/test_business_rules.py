"""
Business rule acceptance tests.

Exercises complaint and activity rules end to end through HTTP against a
real MongoDB test database. Skipped when no server is reachable.
"""

import time
import pytest
from datetime import datetime, timedelta
from bson import ObjectId

pytestmark = pytest.mark.mongodb


class TestComplaintBusinessRules:
    """Complaint submission, listing and status rules."""

    @pytest.fixture(autouse=True)
    def setup_business_rules_test(self, live_client, mongodb_service):
        self.client = live_client
        self.db = mongodb_service.database

    def test_new_complaint_defaults_to_pending(self, sample_complaint_data):
        response = self.client.post('/api/complaints', json=sample_complaint_data)

        assert response.status_code == 201
        created = response.get_json()
        assert created['status'] == 'pending'
        assert ObjectId.is_valid(created['_id'])

        stored = self.db.complaints.find_one({"_id": ObjectId(created['_id'])})
        assert stored['status'] == 'pending'
        assert isinstance(stored['createdAt'], datetime)

    @pytest.mark.parametrize("field", ["phoneNumber", "category", "description"])
    def test_incomplete_complaint_never_persisted(self, sample_complaint_data, field):
        del sample_complaint_data[field]

        response = self.client.post('/api/complaints', json=sample_complaint_data)

        assert response.status_code == 400
        assert self.db.complaints.count_documents({}) == 0

    def test_list_newest_first(self, sample_complaint_data):
        created_ids = []
        for description in ("first", "second", "third"):
            response = self.client.post(
                '/api/complaints',
                json=dict(sample_complaint_data, description=description)
            )
            created_ids.append(response.get_json()['_id'])
            # Stored timestamps have millisecond resolution
            time.sleep(0.01)

        listed = self.client.get('/api/complaints').get_json()

        assert [c['_id'] for c in listed] == list(reversed(created_ids))
        assert [c['description'] for c in listed] == ["third", "second", "first"]

    def test_status_update_for_unknown_id(self, sample_complaint_data):
        self.client.post('/api/complaints', json=sample_complaint_data)
        before = list(self.db.complaints.find())

        response = self.client.put(f'/api/complaints/{ObjectId()}/status', json={"status": "completed"})

        assert response.status_code == 404
        assert response.get_json() == {"message": "Complaint not found"}
        assert list(self.db.complaints.find()) == before

    def test_status_progression(self, sample_complaint_data):
        complaint_id = self.client.post('/api/complaints', json=sample_complaint_data).get_json()['_id']

        first = self.client.put(f'/api/complaints/{complaint_id}/status', json={"status": "in-progress"})
        second = self.client.put(f'/api/complaints/{complaint_id}/status', json={"status": "completed"})

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.get_json()['status'] == 'completed'
        assert self.db.complaints.find_one({"_id": ObjectId(complaint_id)})['status'] == 'completed'

    def test_status_can_move_backwards(self, sample_complaint_data):
        sample_complaint_data['status'] = 'completed'
        complaint_id = self.client.post('/api/complaints', json=sample_complaint_data).get_json()['_id']

        response = self.client.put(f'/api/complaints/{complaint_id}/status', json={"status": "pending"})

        assert response.status_code == 200
        assert response.get_json()['status'] == 'pending'

    def test_status_update_keeps_other_fields(self, sample_complaint_data):
        created = self.client.post('/api/complaints', json=sample_complaint_data).get_json()

        updated = self.client.put(
            f"/api/complaints/{created['_id']}/status",
            json={"status": "in-progress", "category": "Electricity"}
        ).get_json()

        assert updated['category'] == created['category']
        assert updated['createdAt'] == created['createdAt']

    def test_filter_by_phone_number(self, sample_complaint_data):
        for phone in ("+1-555-0100", "+1-555-0199", "+1-555-0100", "+1-555-01000"):
            self.client.post('/api/complaints', json=dict(sample_complaint_data, phoneNumber=phone))

        response = self.client.get('/api/complaints/phone/+1-555-0100')

        assert response.status_code == 200
        complaints = response.get_json()
        assert len(complaints) == 2
        assert {c['phoneNumber'] for c in complaints} == {"+1-555-0100"}


class TestActivityBusinessRules:
    """Activity round trip and delete rules."""

    @pytest.fixture(autouse=True)
    def setup_business_rules_test(self, live_client, mongodb_service):
        self.client = live_client
        self.db = mongodb_service.database

    def test_round_trip_with_default_date(self, sample_activity_data):
        before = datetime.utcnow() - timedelta(seconds=1)

        created = self.client.post('/api/activities', json=sample_activity_data)
        listed = self.client.get('/api/activities').get_json()

        assert created.status_code == 201
        assert len(listed) == 1
        activity = listed[0]
        assert activity['title'] == "Cleanup"
        assert activity['description'] == "Park cleanup"
        assert ObjectId.is_valid(activity['_id'])

        activity_date = datetime.strptime(activity['date'], '%Y-%m-%dT%H:%M:%S.%fZ')
        assert before <= activity_date <= datetime.utcnow() + timedelta(seconds=1)

    def test_list_by_date_descending(self):
        for title, date in (("Older", "2025-01-05T10:00:00Z"), ("Newest", "2025-03-01T10:00:00Z"),
                            ("Middle", "2025-02-01T10:00:00Z")):
            self.client.post('/api/activities', json={"title": title, "description": "Ward event", "date": date})

        titles = [a['title'] for a in self.client.get('/api/activities').get_json()]

        assert titles == ["Newest", "Middle", "Older"]

    def test_partial_update(self, sample_activity_data):
        created = self.client.post('/api/activities', json=sample_activity_data).get_json()

        response = self.client.put(f"/api/activities/{created['_id']}", json={"description": "Lake cleanup"})

        assert response.status_code == 200
        updated = response.get_json()
        assert updated['title'] == "Cleanup"
        assert updated['description'] == "Lake cleanup"
        assert updated['date'] == created['date']

    def test_update_unknown_activity(self):
        response = self.client.put(f'/api/activities/{ObjectId()}', json={"title": "Cleanup"})

        assert response.status_code == 400

    def test_delete_unknown_activity_still_confirms(self):
        response = self.client.delete(f'/api/activities/{ObjectId()}')

        assert response.status_code == 200
        assert response.get_json() == {"message": "Activity deleted successfully"}

    def test_delete_removes_activity(self, sample_activity_data):
        created = self.client.post('/api/activities', json=sample_activity_data).get_json()

        response = self.client.delete(f"/api/activities/{created['_id']}")

        assert response.status_code == 200
        assert self.client.get('/api/activities').get_json() == []
