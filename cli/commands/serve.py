# cli/commands/serve.py
import click
import uvicorn

@click.command()
@click.option('--host', default='127.0.0.1', show_default=True, help='Interface to bind')
@click.option('--port', default=8000, type=int, show_default=True, help='Port to listen on')
@click.option('--reload/--no-reload', default=False, help='Restart on code changes')
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API"""
    click.echo(click.style(f"Serving BookNest on http://{host}:{port}", fg='green'))
    uvicorn.run("api.main:create_app", factory=True, host=host, port=port, reload=reload)
