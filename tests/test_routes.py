"""Integration tests for routes."""


def test_home_page(client):
    """Home page is accessible without certificate."""
    response = client.get("/")
    assert response.is_success
    assert "Treasure Dungeon" in response.body


def test_play_requires_cert(client):
    """Play page requires a client certificate."""
    response = client.get("/play")
    assert response.is_certificate_required


def test_play_with_cert(auth_client):
    """Play page works with a certificate."""
    response = auth_client.get("/play")
    assert response.is_success
    assert "tunnel at" in response.body
    assert "[life: 1000]" in response.body


def test_go_direction(auth_client):
    """Going a direction via /go/ route works."""
    response = auth_client.get("/go/south")
    assert response.is_success
    assert "turns: 1" in response.body


def test_cmd_input_prompt(auth_client):
    """The /cmd route prompts for input when no query."""
    response = auth_client.get("/cmd")
    assert response.is_input_required


def test_cmd_with_input(auth_client):
    """The /cmd route processes commands."""
    response = auth_client.get_input("/cmd", "help")
    assert response.is_success
    assert "Available commands" in response.body


def test_inventory_route(auth_client):
    """The /inventory route shows inventory."""
    response = auth_client.get("/inventory")
    assert response.is_success
    assert "You are carrying nothing." in response.body


def test_help_page(client):
    """Help page is accessible."""
    response = client.get("/help")
    assert response.is_success
    assert "commands" in response.body.lower()


def test_about_page(client):
    """About page is accessible."""
    response = client.get("/about")
    assert response.is_success
    assert "maze" in response.body


def test_new_game_prompt(auth_client):
    """The /new route prompts for confirmation."""
    response = auth_client.get("/new")
    assert response.is_input_required


def test_new_game_confirmed(auth_client):
    """Confirming /new starts over."""
    auth_client.get_input("/cmd", "quit")
    response = auth_client.get_input("/new", "yes")
    assert response.is_success
    assert "A new descent begins!" in response.body


def test_look_route(auth_client):
    """The /look route works."""
    response = auth_client.get("/look")
    assert response.is_success
    assert "Exits:" in response.body


def test_game_over_blocks_commands(auth_client):
    auth_client.get_input("/cmd", "quit")
    response = auth_client.get("/look")
    assert response.is_success
    assert "The game is over." in response.body
