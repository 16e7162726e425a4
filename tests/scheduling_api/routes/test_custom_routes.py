import pytest

from scheduling_api.models.option import Option
from scheduling_api.models.post import Post
from scheduling_api.services import options

EMPTY_SETTINGS = {
    'title': None,
    'description': None,
    'layout': None,
    'color': None,
    'show_featured': None,
    'sections': None,
}


@pytest.fixture
def seeded_posts(testing_session_local):
    db = testing_session_local()
    try:
        db.add_all([
            Post(id=1, title='Hello world', thumbnail='', url='https://blog.test/hello', visits=3),
            Post(id=2, title='Second post', thumbnail='https://blog.test/2.png', url='https://blog.test/second', visits=7),
            Post(id=3, title='Third post', thumbnail='', url='https://blog.test/third'),
        ])
        db.commit()
    finally:
        db.close()


def test_greetings(client) -> None:
    response = client.get('/custom/v1/greetings')

    assert response.status_code == 200
    assert response.json() == {'greeting': 'hi'}


def test_get_settings_defaults_to_empty_record(client) -> None:
    response = client.get('/custom/v1/settings')

    assert response.status_code == 200
    assert response.json() == EMPTY_SETTINGS


def test_settings_are_replaced_wholesale(client) -> None:
    first = client.post(
        '/custom/v1/settings',
        json={'title': 'Clinic', 'layout': 2, 'show_featured': True, 'sections': ['hero', 'news']},
    )
    assert first.status_code == 200
    assert first.json() == {
        **EMPTY_SETTINGS,
        'title': 'Clinic',
        'layout': 2,
        'show_featured': True,
        'sections': ['hero', 'news'],
    }

    client.post('/custom/v1/settings', json={'color': '#ff0000'})

    response = client.get('/custom/v1/settings')
    assert response.json() == {**EMPTY_SETTINGS, 'color': '#ff0000'}


def test_settings_reject_wrong_types(client) -> None:
    response = client.post('/custom/v1/settings', json={'layout': 'wide'})

    assert response.status_code == 422


def test_load_home_settings_ignores_corrupt_option(db_session) -> None:
    db_session.add(Option(name=options.HOME_SETTINGS_OPTION, value='{not json'))
    db_session.commit()

    assert options.load_home_settings(db_session) == options.HomeSettings()


def test_increase_post_likes(client, seeded_posts) -> None:
    client.post('/custom/v1/likes/1')
    response = client.post('/custom/v1/likes/1')

    assert response.status_code == 200
    assert response.json() == {'post_id': 1, 'likes': 2}


def test_increase_post_likes_for_missing_post(client, seeded_posts) -> None:
    response = client.post('/custom/v1/likes/99')

    assert response.status_code == 404
    assert response.json()['detail']['code'] == 'no_post'


def test_increase_post_visits(client, seeded_posts) -> None:
    response = client.post('/custom/v1/visits/3')

    assert response.status_code == 200
    assert response.json() == {'post_id': 3, 'visits': 1}


def test_increase_post_visits_for_missing_post(client, seeded_posts) -> None:
    response = client.post('/custom/v1/visits/42')

    assert response.status_code == 404


def test_most_visited_posts_are_ordered_by_visits(client, seeded_posts) -> None:
    client.post('/custom/v1/visits/1')

    response = client.get('/custom/v1/visits')

    assert response.status_code == 200
    assert response.json() == [
        {'id': 2, 'title': 'Second post', 'thumbnail': 'https://blog.test/2.png', 'url': 'https://blog.test/second', 'visits': 7},
        {'id': 1, 'title': 'Hello world', 'thumbnail': '', 'url': 'https://blog.test/hello', 'visits': 4},
        {'id': 3, 'title': 'Third post', 'thumbnail': '', 'url': 'https://blog.test/third', 'visits': 0},
    ]
