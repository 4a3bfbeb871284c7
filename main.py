from cli.app import cli


def main():
    """gcpinv CLI 엔트리포인트 (cli.app:cli 위임)"""
    cli()


if __name__ == "__main__":
    main()
