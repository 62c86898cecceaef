from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def init_db(c, config="forkfight.yaml"):
    c.run(f"forkfight init {config}")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
