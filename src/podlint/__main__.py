from podlint.cli import main

raise SystemExit(main())
