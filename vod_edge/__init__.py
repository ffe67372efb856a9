"""Edge decision logic for serving growing VOD recordings through a CDN."""
