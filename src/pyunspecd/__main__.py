from pyunspecd.main import app

app(prog_name="pyunspecd")
