from todo_api.utils.security import create_token


def register(client, email, password="password123"):
    return client.post("/auth/register", json={"email": email, "password": password})


def login(client, email, password="password123"):
    return client.post("/auth/login", json={"email": email, "password": password})


def auth_headers(client, email, password="password123"):
    """Register + login ``email`` and return headers carrying its bearer token."""
    register(client, email, password)
    token = login(client, email, password).json()["accessToken"]
    return {"Authorization": f"Bearer {token}"}


def headers_for(user_id, email):
    """Headers with a freshly signed token, without going through /auth/login."""
    return {"Authorization": f"Bearer {create_token(user_id, email)}"}
