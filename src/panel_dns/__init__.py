"""ACME DNS-01 hook for hosting panels that offer no DNS API."""
