import django
from django.conf import settings


def pytest_configure():
    settings.configure(
        DEBUG=False,
        SECRET_KEY='automata-engine-tests',
        ALLOWED_HOSTS=['testserver'],
        ROOT_URLCONF='automata_engine.urls',
        INSTALLED_APPS=['automata_engine'],
        MIDDLEWARE=[],
        DATABASES={},
        AUTOMATA_ENGINE_DEFAULT_MAX_STEPS=1000,
        AUTOMATA_ENGINE_MAX_STEPS_LIMIT=5000,
    )
    django.setup()
