import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

CONTEXTS = ["identity", "catalogue", "ordering", "invoicing", "recipes", "platform"]


def _install(session: nox.Session) -> None:
    """Install the project with its test extra into the nox virtualenv."""
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain-layer tests only (no HTTP, no adapters)."""
    _install(session)
    session.run("pytest", *[f"tests/{context}/domain/" for context in CONTEXTS])


@nox.session(python=PYTHON_VERSIONS)
def tests_api(session: nox.Session) -> None:
    """Run the HTTP integration tests."""
    _install(session)
    session.run("pytest", "-m", "integration")
