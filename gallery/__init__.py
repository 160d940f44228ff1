"""Project gallery service.

``gallery.factory.create_app`` wires configuration, middlewares, routers and
error handlers together; ``gallery.main`` builds the process-wide app.
"""
