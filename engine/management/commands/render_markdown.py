"""
Management command to render a markdown file through the documentation
pipeline.

Useful for checking how a page renders without building the whole site.
"""

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from engine.markdown.renderer import render_markdown


class Command(BaseCommand):
    help = 'Render a markdown file to HTML using the documentation pipeline'

    def add_arguments(self, parser):
        parser.add_argument(
            'file',
            type=str,
            help='Markdown file to render',
        )
        parser.add_argument(
            '--output',
            type=str,
            help='Write the HTML to this file instead of stdout',
        )
        parser.add_argument(
            '--toc',
            action='store_true',
            help='Print the table of contents as JSON after rendering',
        )

    def handle(self, *args, **options):
        source = Path(options['file'])
        if not source.is_file():
            raise CommandError(f'Markdown file not found: {source}')

        context = {'current_file': str(source)}
        html = render_markdown(source.read_text(encoding='utf-8'), context=context)

        output = options.get('output')
        if output:
            Path(output).write_text(html, encoding='utf-8')
            self.stdout.write(self.style.SUCCESS(f'Rendered {source} -> {output}'))
        else:
            self.stdout.write(html)

        if options['toc']:
            self.stdout.write(json.dumps(context.get('toc', []), indent=2))
