"""HTTP server for the roadmap progress tracker."""
