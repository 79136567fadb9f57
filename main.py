import argparse
import json
import logging
import os
import sys
from rich import print
from rich.markup import escape
from received_field.parser import parse_email_header
from received_field.analyzer import analyze_trace


def pretty_print_result(parsed, analysis):
    print('\n[bold underline]Header Summary[/bold underline]')
    print(f"From: {parsed.get('From')}")
    print(f"Subject: {parsed.get('Subject')}")
    print(f"Date: {parsed.get('Date')}")

    print('\n[bold underline]Relay Path[/bold underline] (oldest first)')
    if not analysis['hops']:
        print('[yellow]No Received headers found.[/yellow]')
    for hop in analysis['hops']:
        date = hop['date'] or '[red]no date[/red]'
        if hop['date'] and not hop['strict']:
            date += ' [yellow](date only)[/yellow]'
        delay = '' if hop['delay_seconds'] is None else f" ({hop['delay_seconds']:+.0f}s)"
        print(f"{hop['index']:>2}. {date}{delay}")
        print(f"    {escape(hop['info']) or '[dim]<unparsed>[/dim]'}")

    if analysis['total_seconds'] is not None:
        print(f"\nTotal transit: [bold]{analysis['total_seconds']:.0f}s[/bold]")
    if analysis['extracted_ips']:
        print(f"IPs: {', '.join(analysis['extracted_ips'])}")
    if analysis['notes']:
        print('\nNotes:')
        for n in analysis['notes']:
            print(f" - {n}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Received header trace analyzer')
    parser.add_argument('header_file', help="Path to raw header text file ('-' for stdin)")
    parser.add_argument('--json', help='Print the analysis as JSON', action='store_true')
    parser.add_argument('--verbose', help='Log parser fallbacks and invalid dates', action='store_true')
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    header_file = args.header_file
    if header_file == '-':
        header_text = sys.stdin.read()
    else:
        if not os.path.exists(header_file):
            print(f"[yellow]Warning:[/yellow] header file not found: {header_file}")
            sys.exit(1)
        with open(header_file, 'r', encoding='utf-8') as f:
            header_text = f.read()

    parsed = parse_email_header(header_text)
    analysis = analyze_trace(parsed)

    if args.json:
        # plain stdout, rich markup would corrupt the JSON
        sys.stdout.write(json.dumps(analysis, indent=2) + '\n')
    else:
        pretty_print_result(parsed, analysis)
