"""FastAPI application and routes.

This module provides the REST API for the farming alerts service.

## API Structure

- POST /farming-alerts - Generate prioritized alerts for a location
- OPTIONS /farming-alerts - CORS preflight request
- GET /health - Health check

## Request

```json
{"location": "Nakuru", "latitude": -0.3031, "longitude": 36.0800}
```

All three fields are required.
"""

from farm_alerts.api.app import create_app

__all__ = ["create_app"]
