def create_session(client):
    res = client.post('/api/sessions')
    assert res.status_code == 201
    return res.json()


def wrong_option(round_data):
    return next(o for o in round_data['options'] if o['css'] != round_data['target']['css'])


def test_health(client):
    assert client.get('/health').json() == {'status': 'healthy'}


def test_create_session(client):
    data = create_session(client)
    assert data['score'] == 0
    assert data['round']['round_number'] == 1
    assert data['round']['status'] == 'pending'
    assert len(data['round']['options']) == 6
    csses = [o['css'] for o in data['round']['options']]
    assert csses.count(data['round']['target']['css']) == 1
    assert len(set(csses)) == 6


def test_correct_guess_flow(client):
    data = create_session(client)
    sid = data['session_id']
    target = data['round']['target']

    res = client.post(f'/api/sessions/{sid}/guess', json={'color': target})
    assert res.status_code == 200
    body = res.json()
    assert body['outcome'] == 'correct'
    assert body['score'] == 1
    assert body['round_over'] is True
    assert body['round']['status'] == 'correct'
    assert body['feedback']['advance_after_ms'] == 1500

    # second guess on a resolved round is ignored
    again = client.post(f'/api/sessions/{sid}/guess', json={'color': target['css']}).json()
    assert again['outcome'] == 'already_resolved'
    assert again['score'] == 1

    # caller advances
    res = client.post(f'/api/sessions/{sid}/rounds')
    assert res.status_code == 201
    assert res.json()['round_number'] == 2
    assert res.json()['status'] == 'pending'
    assert client.get(f'/api/sessions/{sid}').json()['score'] == 1


def test_wrong_guess_keeps_round(client):
    data = create_session(client)
    sid = data['session_id']
    wrong = wrong_option(data['round'])

    body = client.post(f'/api/sessions/{sid}/guess', json={'color': wrong}).json()
    assert body['outcome'] == 'incorrect'
    assert body['score'] == 0
    assert body['round_over'] is False
    assert body['feedback']['unlock_after_ms'] == 1500

    current = client.get(f'/api/sessions/{sid}/rounds/current').json()
    assert current['status'] == 'incorrect'
    assert current['round_number'] == 1
    assert current['options'] == data['round']['options']


def test_invalid_color_is_an_outcome(client):
    sid = create_session(client)['session_id']

    for bad in [None, 'hsl(999, 10%, 10%)', {'hue': 10}, [1, 2]]:
        res = client.post(f'/api/sessions/{sid}/guess', json={'color': bad})
        assert res.status_code == 200
        assert res.json()['outcome'] == 'invalid_color'
        assert res.json()['round']['status'] == 'pending'


def test_reset_session(client):
    data = create_session(client)
    sid = data['session_id']
    client.post(f'/api/sessions/{sid}/guess', json={'color': data['round']['target']})

    body = client.post(f'/api/sessions/{sid}/reset').json()
    assert body['score'] == 0
    assert body['round']['round_number'] == 1
    assert body['round']['status'] == 'pending'


def test_end_session(client):
    sid = create_session(client)['session_id']
    assert client.delete(f'/api/sessions/{sid}').status_code == 204
    assert client.get(f'/api/sessions/{sid}').status_code == 404


def test_unknown_session(client):
    assert client.get('/api/sessions/nope').status_code == 404
    assert client.get('/api/sessions/nope/rounds/current').status_code == 404
    assert client.post('/api/sessions/nope/rounds').status_code == 404
    assert client.post('/api/sessions/nope/reset').status_code == 404
    assert client.post('/api/sessions/nope/guess', json={'color': None}).status_code == 404
    assert client.delete('/api/sessions/nope').status_code == 404


def test_guess_is_logged(client, caplog):
    data = create_session(client)
    sid = data['session_id']

    with caplog.at_level('INFO', logger='api.rounds'):
        client.post(f'/api/sessions/{sid}/guess', json={'color': wrong_option(data['round'])})

    assert f'Guess in session {sid} round 1: incorrect' in caplog.text
