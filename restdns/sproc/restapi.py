"""Implementation of restdns API server plugin."""


import click

from restdns import context
from restdns import rest
from restdns.rest import api


def init():
    """Return top level command handler."""

    @click.command()
    @click.option('-p', '--port', help='Port for TCP server',
                  envvar='RESTDNS_PORT', type=int)
    @click.option('-s', '--host', help='Address to listen on')
    @click.option('-t', '--title', help='API Doc Title',
                  default='restdns REST API')
    @click.option('--workers', help='Number of workers', type=int)
    @click.pass_context
    def top(ctx, port, host, title, workers):
        """Run restdns API server."""
        settings = ctx.obj['settings']
        server = settings.server

        admin_ctx = context.AdminContext.from_settings(settings.ldap)
        api.init(settings, admin_ctx, title.replace('_', ' '))

        rest_server = rest.TcpRestServer(
            port if port is not None else server.port,
            host=host or server.host,
            workers=workers if workers is not None else server.workers,
            xheaders=server.xheaders,
        )
        rest_server.run()

    return top
