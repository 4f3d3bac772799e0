# Gunicorn configuration
# Run with: gunicorn -c deploy/gunicorn.conf.py "contest_tracker:create_app('production')"
import multiprocessing

bind = "127.0.0.1:8000"
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "gthread"
threads = 4
timeout = 60
keepalive = 5
errorlog = "/var/log/contest-tracker/gunicorn-error.log"
accesslog = "/var/log/contest-tracker/gunicorn-access.log"
loglevel = "info"
