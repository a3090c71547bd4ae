from campusvoice.main import run

run()
