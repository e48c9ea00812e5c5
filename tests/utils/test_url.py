from cross_signin.utils._url import auth_base_url, error_redirect_url, with_query_params


def test_error_redirect_url():
    url = "https://app.example.com/api/auth"
    result = error_redirect_url(url, "SignInError")
    assert result == "https://app.example.com/api/auth/error?error=SignInError"


def test_error_redirect_url_with_trailing_slash():
    url = "https://app.example.com/api/auth/"
    result = error_redirect_url(url, "SignInError")
    assert result == "https://app.example.com/api/auth/error?error=SignInError"


def test_error_redirect_url_replaces_error_and_keeps_other_params():
    url = "https://app.example.com/auth?lang=en&error=Previous"
    result = error_redirect_url(url, "AccessDenied")
    assert result == "https://app.example.com/auth/error?lang=en&error=AccessDenied"


def test_error_redirect_url_on_root():
    result = error_redirect_url("http://localhost:8000", "SignInError")
    assert result == "http://localhost:8000/error?error=SignInError"


def test_with_query_params_encodes_values():
    result = with_query_params("https://idp.com/authorize", {"scope": "openid email"})
    assert result == "https://idp.com/authorize?scope=openid+email"


def test_with_query_params_keeps_existing_params():
    result = with_query_params("https://idp.com/authorize?tenant=a", {"state": "s"})
    assert result == "https://idp.com/authorize?tenant=a&state=s"


def test_auth_base_url():
    url = "http://example.com/api/auth/signin/github?foo=bar"
    result = auth_base_url(url, 2)
    assert result == "http://example.com/api/auth"


def test_auth_base_url_with_trailing_slash():
    url = "http://example.com/api/auth/signin/github/"
    result = auth_base_url(url, 2)
    assert result == "http://example.com/api/auth"


def test_auth_base_url_at_root():
    url = "http://example.com:8080/signin/email"
    result = auth_base_url(url, 2)
    assert result == "http://example.com:8080"


def test_auth_base_url_with_base_url():
    """The public base URL replaces the internal host."""
    url = "http://internal:8000/auth/signin/github"
    result = auth_base_url(url, 2, "https://public.com/")
    assert result == "https://public.com/auth"
