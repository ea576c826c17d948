"""python-pptx backend with PresentationML timing and transition writers."""
