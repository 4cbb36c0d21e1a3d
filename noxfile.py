import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

nox.options.sessions = ["tests"]


def _install(session: nox.Session) -> None:
    # psycopg2-binary ships a compiled wheel per interpreter; a cached wheel
    # from another Python version fails at import time.
    session.run("poetry", "install", "--all-extras", external=True)
    session.install("--force-reinstall", "--no-cache-dir", "psycopg2-binary")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Whole suite."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize("layer", ["domain", "application", "integration", "bdd"])
def layer(session: nox.Session, layer: str) -> None:
    """One test layer, selected by the markers conftest.py applies."""
    _install(session)
    session.run("pytest", "-m", layer, *session.posargs)
