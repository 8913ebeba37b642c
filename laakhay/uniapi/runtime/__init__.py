"""Runtime layer: transport, endpoints and telemetry."""
