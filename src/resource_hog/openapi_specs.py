# src/resource_hog/openapi_specs.py
"""
OpenAPI/Swagger specifications for Resource Hog API endpoints.

Each spec is a dictionary that can be used with flasgger's swag_from decorator.
"""

# ---- Shared schemas ----

HOG_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "memoryMb": {
            "type": "integer",
            "example": 256,
            "description": "Memory to allocate in MB (clamped between 0-2048)",
        },
        "cpuSliceMs": {
            "type": "integer",
            "example": 20,
            "description": "CPU burst duration in milliseconds (clamped between 1-200)",
        },
        "maxMinutes": {
            "type": "integer",
            "example": 10,
            "description": "Maximum runtime in minutes (clamped between 1-120)",
        },
        "intensityMultiplier": {
            "type": "integer",
            "example": 2,
            "description": "Workload repetitions per burst iteration (clamped between 1-100)",
        },
    },
}

ERROR_SCHEMA = {
    "type": "object",
    "properties": {
        "error": {"type": "string", "example": "Failed to start resource hog"},
        "details": {"type": "string"},
    },
}

# ---- Service Info ----

APP_INFO_SPEC = {
    "tags": ["Service"],
    "summary": "Application Info",
    "description": "Returns Resource Hog application info and version details.",
    "responses": {
        200: {
            "description": "Application info",
            "schema": {
                "type": "object",
                "properties": {
                    "message": {
                        "type": "string",
                        "example": "Resource Hog - Autoscaling Load Generator",
                    },
                    "timestamp": {"type": "string", "format": "date-time"},
                    "version": {"type": "string", "example": "dev"},
                    "environment": {"type": "string", "example": "local"},
                },
            },
        },
    },
}

# ---- Resource Hog ----

HOG_START_SPEC = {
    "tags": ["Resource Hog"],
    "summary": "Start Resource Hog",
    "description": "Starts a worker process that consumes the requested memory and CPU "
    "to exercise horizontal pod autoscaling. Out-of-range values are clamped, "
    "invalid values fall back to defaults. A running hog is replaced by the new one.",
    "parameters": [
        {
            "name": "memoryMb",
            "in": "query",
            "type": "integer",
            "default": 256,
            "minimum": 0,
            "maximum": 2048,
            "description": "Memory to allocate in MB",
        },
        {
            "name": "cpuSliceMs",
            "in": "query",
            "type": "integer",
            "default": 20,
            "minimum": 1,
            "maximum": 200,
            "description": "CPU burst duration in milliseconds",
        },
        {
            "name": "maxMinutes",
            "in": "query",
            "type": "integer",
            "default": 10,
            "minimum": 1,
            "maximum": 120,
            "description": "Maximum runtime in minutes; the hog auto-stops after this",
        },
        {
            "name": "intensityMultiplier",
            "in": "query",
            "type": "integer",
            "default": 2,
            "minimum": 1,
            "maximum": 100,
            "description": "Workload repetitions per burst iteration",
        },
        {
            "name": "body",
            "in": "body",
            "required": False,
            "schema": HOG_CONFIG_SCHEMA,
            "description": "Same settings as a JSON object; keys here override the query string",
        },
    ],
    "responses": {
        202: {
            "description": "Resource hog started",
            "schema": {
                "type": "object",
                "properties": {
                    "status": {"type": "string", "example": "started"},
                    "config": HOG_CONFIG_SCHEMA,
                    "startedAt": {"type": "string", "format": "date-time"},
                    "message": {
                        "type": "string",
                        "example": "Resource hog started. Will auto-stop after 10 minutes.",
                    },
                },
            },
        },
        500: {"description": "Worker process could not be started", "schema": ERROR_SCHEMA},
    },
}

HOG_STOP_SPEC = {
    "tags": ["Resource Hog"],
    "summary": "Stop Resource Hog",
    "description": "Signals the running hog to stop. The worker is force terminated "
    "if it has not exited within the grace period. Calling stop when nothing is "
    "running is a no-op.",
    "responses": {
        200: {
            "description": "Resource hog stopped or was not running",
            "schema": {
                "type": "object",
                "properties": {
                    "status": {
                        "type": "string",
                        "enum": ["stopped", "not_running"],
                        "example": "stopped",
                    },
                    "config": HOG_CONFIG_SCHEMA,
                    "runtime": {"type": "string", "example": "45 seconds"},
                    "runtimeSeconds": {"type": "integer", "example": 45},
                    "message": {
                        "type": "string",
                        "example": "Resource hog stopped successfully.",
                    },
                },
            },
        },
    },
}

HOG_STATUS_SPEC = {
    "tags": ["Resource Hog"],
    "summary": "Resource Hog Status",
    "description": "Returns whether the hog is running, with its configuration and runtime.",
    "responses": {
        200: {
            "description": "Current hog status",
            "schema": {
                "type": "object",
                "properties": {
                    "status": {
                        "type": "string",
                        "enum": ["running", "not_running"],
                        "example": "running",
                    },
                    "config": HOG_CONFIG_SCHEMA,
                    "startedAt": {"type": "string", "format": "date-time"},
                    "runtime": {"type": "string", "example": "45 seconds"},
                    "runtimeSeconds": {"type": "integer", "example": 45},
                    "process": {
                        "type": "object",
                        "properties": {
                            "pid": {"type": "integer", "example": 4242},
                            "rssMb": {
                                "type": "integer",
                                "example": 262,
                                "description": "Resident memory of the worker process",
                            },
                        },
                    },
                },
            },
        },
    },
}
