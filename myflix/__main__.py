from myflix.server import run

run()
