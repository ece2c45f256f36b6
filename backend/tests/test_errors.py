def test_unknown_path_returns_error_json(client):
    resp = client.get('/non-existent-path')
    # Flask default 404 should be wrapped by error handler
    assert resp.status_code == 404
    body = resp.get_json()
    assert 'error' in body
    assert body['error']['status'] == 404
    assert 'detail' in body['error']


def test_missing_album_is_404(client):
    resp = client.get('/api/album/9999')
    assert resp.status_code == 404
    assert resp.get_json()['error']['detail'] == 'album not found'


def test_unauthorized_create_is_rejected(client):
    resp = client.post('/api/album', json={'title': 'x'})
    assert resp.status_code == 401
