# Serverless function entry: /api/shakas

from shaka_api.serverless import create_serverless_app

app = create_serverless_app()
