"""Server-rendered pages, their components and the render error boundary."""
