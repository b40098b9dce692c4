from app.server import should_listen


def test_listens_in_normal_operation():
    assert should_listen({}, app_env="development") is True
    assert should_listen({}, app_env="production") is True


def test_does_not_listen_under_test_env():
    assert should_listen({}, app_env="test") is False


def test_does_not_listen_inside_pytest():
    assert should_listen({"PYTEST_CURRENT_TEST": "tests/test_server.py::x"}, app_env="development") is False


def test_does_not_listen_on_serverless_hosts():
    assert should_listen({"NETLIFY": "true"}, app_env="production") is False
    assert should_listen({"VERCEL": "1"}, app_env="production") is False


def test_empty_serverless_flag_is_ignored():
    assert should_listen({"NETLIFY": ""}, app_env="production") is True


def test_serverless_entry_exports_the_app():
    from api.index import app as exported
    from app.main import app

    assert exported is app
