"""Infrastructure Layer — logging, merge engine adapter, archive codec, ASGI glue."""
