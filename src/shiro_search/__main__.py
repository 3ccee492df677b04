from shiro_search.cli import main


raise SystemExit(main())
