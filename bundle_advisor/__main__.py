from bundle_advisor.cli import cli

cli(prog_name="bundle-advisor")
