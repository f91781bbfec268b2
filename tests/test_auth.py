from sqlassist.auth import greeting, initial, password_strength, strength_bar, validate_registration


def test_password_strength_scale():
    assert password_strength("") == 0
    assert password_strength("abc") == 0
    assert password_strength("abcdefgh") == 1
    assert password_strength("abcdefghijkl") == 2
    assert password_strength("Abcdefghijkl") == 3
    assert password_strength("Abcdefghij1!") == 4


def test_strength_bar_clamps():
    assert strength_bar(-3) == ("#dc2626", 0.2)
    assert strength_bar(4) == ("#16a34a", 1.0)
    assert strength_bar(9) == ("#16a34a", 1.0)


def test_registration_checks():
    assert validate_registration("a@b.c", "secret", "secret") is None
    assert validate_registration("a@b.c", "secret", "other") == "Passwords do not match."
    assert validate_registration("  ", "secret", "secret") == "Email and password are required."


def test_greeting_by_hour():
    assert greeting(8) == "Good morning"
    assert greeting(12) == "Good afternoon"
    assert greeting(18) == "Good evening"


def test_initial():
    assert initial("maria@example.com") == "M"
    assert initial("") == "?"
    assert initial(None) == "?"
