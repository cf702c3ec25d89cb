"""Browser performance measurement: network traffic and page timing reports."""
