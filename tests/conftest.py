"""Shared HTML fixtures."""

import pytest

MY_TOPICS_HTML = """
<html>
<head><title>V2EX › 我的主题</title></head>
<body>
<div id="Top"><a href="/">V2EX</a></div>
<div id="Wrapper">
  <div class="content">
    <div id="Main">
      <div class="box">
        <div class="cell item">
          <table cellpadding="0" cellspacing="0" border="0" width="100%">
            <tr>
              <td width="48" valign="top" align="center"><a href="/member/alice"><img src="//cdn.v2ex.com/avatar/c4ca/4238/1_normal.png?m=1700000000" class="avatar" border="0" align="default" /></a></td>
              <td width="10"></td>
              <td width="auto" valign="middle">
                <span class="item_title"><a href="/t/12345#reply10" class="topic-link">Python 装饰器的一个问题</a></span>
                <div class="sep5"></div>
                <span class="small fade"><a class="node" href="/go/python">Python</a> &nbsp;•&nbsp; <strong><a href="/member/alice">alice</a></strong> &nbsp;•&nbsp; 36 天前 &nbsp;•&nbsp; 最后回复来自 <strong><a href="/member/bob">bob</a></strong></span>
              </td>
              <td width="70" align="right" valign="middle"><a href="/t/12345#reply10" class="count_livid">10</a></td>
            </tr>
          </table>
        </div>
        <div class="cell item">
          <table cellpadding="0" cellspacing="0" border="0" width="100%">
            <tr>
              <td width="48" valign="top" align="center"><a href="/member/alice"><img src="https://cdn.v2ex.com/gravatar/0bc83cb571cd1c50ba6f3e8a78ef1346?s=48&amp;d=retro" class="avatar" border="0" align="default" /></a></td>
              <td width="10"></td>
              <td width="auto" valign="middle">
                <span class="item_title"><a href="/t/67890#reply0" class="topic-link">分享一个命令行小工具</a></span>
                <div class="sep5"></div>
                <span class="small fade"><a class="node" href="/go/create">分享创造</a> &nbsp;•&nbsp; <strong><a href="/member/alice">alice</a></strong> &nbsp;•&nbsp; 2 小时 5 分钟前</span>
              </td>
              <td width="70" align="right" valign="middle"></td>
            </tr>
          </table>
        </div>
        <div class="cell">
          <input type="number" class="page_input" autocomplete="off" value="1" min="1" max="3" />
        </div>
      </div>
    </div>
  </div>
</div>
</body>
</html>
"""

EMPTY_MY_TOPICS_HTML = """
<html><body>
<div id="Wrapper">
  <div class="box">
    <div class="cell">还没有创建任何主题</div>
  </div>
</div>
</body></html>
"""

CHANGED_MY_TOPICS_HTML = """
<html><body>
<div id="Wrapper">
  <div class="box">
    <div class="cell item">
      <h2 class="topic-title"><a href="/t/12345#reply10">Python 装饰器的一个问题</a></h2>
    </div>
  </div>
</div>
</body></html>
"""

SIGNIN_HTML = """
<html><body>
<div id="Login"><form action="/signin" method="post"></form></div>
</body></html>
"""

NOTIFICATIONS_HTML = """
<html><body>
<div id="Wrapper">
  <div id="Rightbar">
    <div class="box">
      <div class="cell"><a href="/member/alice">alice</a></div>
      <div class="inner"><a href="/notifications" class="fade">2 条未读提醒</a></div>
    </div>
  </div>
  <div class="box">
    <div class="cell" id="n_9001">
      <table cellpadding="0" cellspacing="0" border="0" width="100%">
        <tr>
          <td width="32" align="left" valign="top"><a href="/member/bob"><img src="https://cdn.v2ex.com/avatar/0000/0001/2_mini.png?m=5" class="avatar" border="0" align="default" /></a></td>
          <td valign="middle">
            <span class="fade"><a href="/member/bob"><strong>bob</strong></a> 在 <a href="/t/12345#reply3" class="topic-link">Python 装饰器的一个问题</a> 里回复了你</span> &nbsp; <span class="snow">3 小时 43 分钟前</span>
            <div class="sep5"></div>
            <div class="payload">试试 functools.wraps</div>
          </td>
        </tr>
      </table>
    </div>
    <div class="cell" id="n_9000">
      <table cellpadding="0" cellspacing="0" border="0" width="100%">
        <tr>
          <td width="32" align="left" valign="top"><a href="/member/carol"><img src="https://cdn.v2ex.com/avatar/0000/0002/3_mini.png?m=6" class="avatar" border="0" align="default" /></a></td>
          <td valign="middle">
            <span class="fade"><a href="/member/carol"><strong>carol</strong></a> 收藏了你发布的主题 › <a href="/t/67890#reply0" class="topic-link">分享一个命令行小工具</a></span> &nbsp; <span class="snow">1 天前</span>
          </td>
        </tr>
      </table>
    </div>
    <div class="cell">
      <input type="number" class="page_input" autocomplete="off" value="1" min="1" max="12" />
    </div>
  </div>
</div>
</body></html>
"""


@pytest.fixture
def my_topics_html() -> str:
    """A "my topics" page with two topics and three pages."""
    return MY_TOPICS_HTML


@pytest.fixture
def empty_my_topics_html() -> str:
    """A "my topics" page for a user without topics."""
    return EMPTY_MY_TOPICS_HTML


@pytest.fixture
def changed_my_topics_html() -> str:
    """A "my topics" page whose item markup no longer matches the mapping."""
    return CHANGED_MY_TOPICS_HTML


@pytest.fixture
def signin_html() -> str:
    """A sign-in page, served instead of the listing when logged out."""
    return SIGNIN_HTML


@pytest.fixture
def notifications_html() -> str:
    """A notifications page with two entries and twelve pages."""
    return NOTIFICATIONS_HTML
