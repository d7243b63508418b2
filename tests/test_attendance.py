import pytest
from sqlalchemy.exc import OperationalError

from ceps.models import Attendance
from ceps.models.base import utcnow


@pytest.fixture
def approved_event(client, faculty, make_user, auth_headers, create_event):
    """An event with two approved students and one pending."""
    event = create_event(faculty)
    approved = [make_user('student'), make_user('student')]
    pending = make_user('student')

    for user in approved + [pending]:
        client.post(f"/api/events/{event['id']}/register", headers=auth_headers(user))
    for user in approved:
        client.put('/api/events/update-status',
                   json={'eventId': event['id'], 'userId': user.id, 'status': 'approved'},
                   headers=auth_headers(faculty))

    return event, approved, pending


def _record(user, status):
    return {'studentId': user.id, 'studentName': user.name, 'email': user.email, 'status': status}


def test_roster_lists_only_approved(client, faculty, auth_headers, approved_event):
    event, approved, pending = approved_event

    response = client.get(f"/api/attendance/event/{event['id']}/students", headers=auth_headers(faculty))

    assert response.status_code == 200
    ids = {s['studentId'] for s in response.get_json()['students']}
    assert ids == {user.id for user in approved}


def test_roster_requires_staff(client, student, auth_headers, approved_event):
    event, _, _ = approved_event

    response = client.get(f"/api/attendance/event/{event['id']}/students", headers=auth_headers(student))

    assert response.status_code == 403


def test_save_overwrites_previous_batch(client, db, faculty, auth_headers, approved_event):
    event, (first, second), _ = approved_event
    headers = auth_headers(faculty)

    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present'), _record(second, 'present')]
    }, headers=headers)
    response = client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'absent')]
    }, headers=headers)

    assert response.status_code == 200
    assert response.get_json()['count'] == 1
    records = db.session.query(Attendance).filter_by(event_id=event['id']).all()
    assert [(r.student_id, r.status) for r in records] == [(first.id, 'absent')]


def test_save_skips_invalid_records(client, faculty, auth_headers, approved_event):
    event, (first, second), _ = approved_event

    response = client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [
            _record(first, 'present'),
            _record(second, 'late'),
            {'studentId': second.id, 'status': 'present'}
        ]
    }, headers=auth_headers(faculty))

    assert response.status_code == 200
    assert response.get_json()['count'] == 1


def test_save_without_valid_records(client, faculty, auth_headers, approved_event):
    event, (first, _), _ = approved_event

    response = client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'sleeping')]
    }, headers=auth_headers(faculty))

    assert response.status_code == 400
    assert response.get_json()['message'] == 'No valid student records found.'


def test_save_missing_payload(client, faculty, auth_headers):
    response = client.post('/api/attendance/save', json={'records': []}, headers=auth_headers(faculty))

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Missing eventId or records'


def test_event_attendance_listing(client, faculty, auth_headers, approved_event):
    event, (first, second), _ = approved_event
    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present'), _record(second, 'absent')]
    }, headers=auth_headers(faculty))

    response = client.get(f"/api/attendance/event/{event['id']}", headers=auth_headers(faculty))

    statuses = {r['studentId']: r['status'] for r in response.get_json()['attendance']}
    assert statuses == {first.id: 'present', second.id: 'absent'}


def test_student_attendance_includes_event(client, faculty, auth_headers, approved_event):
    event, (first, second), _ = approved_event
    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present'), _record(second, 'absent')]
    }, headers=auth_headers(faculty))

    response = client.get('/api/attendance/student', headers=auth_headers(first))

    attendance = response.get_json()['attendance']
    assert len(attendance) == 1
    assert attendance[0]['status'] == 'present'
    assert attendance[0]['eventId']['title'] == 'Hackathon'
    assert attendance[0]['eventId']['venue'] == 'Main Auditorium'


def test_student_without_attendance(client, student, auth_headers):
    response = client.get('/api/attendance/student', headers=auth_headers(student))

    assert response.status_code == 200
    assert response.get_json()['attendance'] == []


def test_delete_event_removes_attendance(client, db, faculty, auth_headers, approved_event):
    event, (first, _), _ = approved_event
    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present')]
    }, headers=auth_headers(faculty))

    client.delete(f"/api/events/{event['id']}", headers=auth_headers(faculty))

    assert db.session.query(Attendance).count() == 0


def test_failed_save_keeps_previous_roster(client, db, faculty, auth_headers, approved_event, monkeypatch):
    event, (first, second), _ = approved_event
    headers = auth_headers(faculty)
    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present')]
    }, headers=headers)

    def fail_insert(instances):
        raise OperationalError('INSERT INTO attendance', {}, Exception('database is locked'))

    monkeypatch.setattr(db.session, 'add_all', fail_insert)
    response = client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(second, 'absent')]
    }, headers=headers)
    monkeypatch.undo()

    assert response.status_code == 500
    records = db.session.query(Attendance).filter_by(event_id=event['id']).all()
    assert [(r.student_id, r.status) for r in records] == [(first.id, 'present')]


def test_save_rejects_unknown_students(client, db, faculty, auth_headers, approved_event):
    event, (first, _), _ = approved_event
    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present')]
    }, headers=auth_headers(faculty))

    response = client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [{'studentId': '00000000-0000-0000-0000-000000000000', 'studentName': 'Ghost',
                     'email': 'ghost@college.edu', 'status': 'present'}]
    }, headers=auth_headers(faculty))

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Attendance records reference unknown students'
    records = db.session.query(Attendance).filter_by(event_id=event['id']).all()
    assert [r.student_id for r in records] == [first.id]


def test_attendance_is_stamped_in_utc(client, db, faculty, auth_headers, approved_event):
    event, (first, _), _ = approved_event

    before = utcnow()
    client.post('/api/attendance/save', json={
        'eventId': event['id'],
        'records': [_record(first, 'present')]
    }, headers=auth_headers(faculty))
    after = utcnow()

    record = db.session.query(Attendance).filter_by(event_id=event['id']).one()
    assert before <= record.date <= after
    assert before <= record.created_at <= after
