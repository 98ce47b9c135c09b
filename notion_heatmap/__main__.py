from notion_heatmap.main import main


raise SystemExit(main())
