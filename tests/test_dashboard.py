def _register_and_approve(client, event, student, faculty, auth_headers):
    client.post(f"/api/events/{event['id']}/register", headers=auth_headers(student))
    client.put('/api/events/update-status',
               json={'eventId': event['id'], 'userId': student.id, 'status': 'approved'},
               headers=auth_headers(faculty))


def test_student_dashboard_counts_own_registrations(client, faculty, make_user, auth_headers, create_event):
    first_event = create_event(faculty)
    second_event = create_event(faculty, title='Quiz Night')
    me, other = make_user('student'), make_user('student')

    _register_and_approve(client, first_event, me, faculty, auth_headers)
    client.post(f"/api/events/{second_event['id']}/register", headers=auth_headers(me))
    client.post(f"/api/events/{second_event['id']}/register", headers=auth_headers(other))
    client.post('/api/trainers', json={'name': 'T', 'expertise': 'X', 'email': 't@example.com'},
                headers=auth_headers(faculty))

    response = client.get('/api/dashboard', headers=auth_headers(me))

    data = response.get_json()
    assert response.status_code == 200
    assert data['role'] == 'student'
    assert data['totalEvents'] == 2
    assert data['activeParticipants'] == 2
    assert data['approvedRegistrations'] == 1
    assert data['trainersInvited'] == 0
    assert len(data['events']) == 2


def test_staff_dashboard_counts_everything(client, faculty, make_user, auth_headers, create_event):
    event = create_event(faculty)
    first, second = make_user('student'), make_user('student')
    _register_and_approve(client, event, first, faculty, auth_headers)
    client.post(f"/api/events/{event['id']}/register", headers=auth_headers(second))
    client.post('/api/trainers', json={'name': 'T', 'expertise': 'X', 'email': 't@example.com'},
                headers=auth_headers(faculty))

    data = client.get('/api/dashboard', headers=auth_headers(faculty)).get_json()

    assert data['role'] == 'faculty'
    assert data['totalEvents'] == 1
    assert data['activeParticipants'] == 2
    assert data['approvedRegistrations'] == 1
    assert data['trainersInvited'] == 1


def test_dashboard_requires_token(client):
    assert client.get('/api/dashboard').status_code == 401


def test_analytics_overview(client, admin, faculty, make_user, auth_headers, create_event):
    event = create_event(faculty)
    create_event(faculty, title='Closing Ceremony', status='completed')
    student = make_user('student')
    _register_and_approve(client, event, student, faculty, auth_headers)
    client.post('/api/feedback', json={'message': 'Good', 'rating': 4}, headers=auth_headers(student))
    client.post('/api/feedback', json={'message': 'Fine', 'rating': 3}, headers=auth_headers(student))

    response = client.get('/api/analytics/overview', headers=auth_headers(admin))

    data = response.get_json()['data']
    assert response.status_code == 200
    assert data['totalEvents'] == 2
    assert data['upcoming'] == 1
    assert data['completed'] == 1
    assert data['ongoing'] == 0
    assert data['totalStudents'] == 1
    assert data['totalFaculty'] == 1
    assert data['totalFeedbacks'] == 2
    assert data['approvedRegistrations'] == 1
    assert data['pendingRegistrations'] == 0
    assert data['avgRating'] == 3.5


def test_analytics_overview_requires_staff(client, student, auth_headers):
    assert client.get('/api/analytics/overview', headers=auth_headers(student)).status_code == 403
