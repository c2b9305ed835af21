"""Resource Hog: bounded synthetic CPU and memory load for autoscaling tests."""
