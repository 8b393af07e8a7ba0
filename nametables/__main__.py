from nametables.main import run

run()
