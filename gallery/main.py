from prometheus_fastapi_instrumentator import Instrumentator

from gallery import models  # noqa: F401  (registers tables)
from gallery.core.config import settings
from gallery.core.logging import configure_logging
from gallery.db.session import Base, engine
from gallery.factory import create_app

configure_logging(settings.LOG_LEVEL)
Base.metadata.create_all(bind=engine)

app = create_app(settings)
Instrumentator().instrument(app).expose(app, endpoint="/api/metrics")
